from flask_wtf import FlaskForm
from wtforms import StringField, SelectField, IntegerField
from wtforms.validators import DataRequired, NumberRange, Optional, ValidationError

from predictx.utils.enums import BetType
from predictx.utils.validators import as_text


class BetForm(FlaskForm):
    event_id = StringField('Event', filters=[as_text], validators=[DataRequired()])
    type = SelectField('Type', choices=[t.value for t in BetType], filters=[lambda v: v.lower() if isinstance(v, str) else v])
    quantity = IntegerField('Quantity', default=1,
                            validators=[Optional(), NumberRange(min=1, message='Quantity must be at least 1')])

    def validate_quantity(self, field):
        raw = field.raw_data[0] if field.raw_data else None
        if isinstance(raw, bool) or (isinstance(raw, float) and not raw.is_integer()):
            raise ValidationError('Quantity must be a whole number')

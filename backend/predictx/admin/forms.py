from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField, TextAreaField, SelectField, FloatField, DateTimeField
from wtforms.validators import DataRequired, Length, NumberRange, Optional, URL, ValidationError

from predictx.utils.enums import CATEGORIES
from predictx.utils.validators import as_text, as_secret

DATE_FORMATS = ["%Y-%m-%dT%H:%M", "%Y-%m-%dT%H:%M:%S", "%Y-%m-%d %H:%M:%S", "%Y-%m-%d"]


class AdminLoginForm(FlaskForm):
    username = StringField('Username', filters=[as_text],
                           validators=[DataRequired(message='Please enter both username and password')])
    password = PasswordField('Password', filters=[as_secret],
                             validators=[DataRequired(message='Please enter both username and password')])


class EventForm(FlaskForm):
    title = StringField('Title', filters=[as_text], validators=[DataRequired(), Length(max=300)])
    description = TextAreaField('Description', filters=[as_text], validators=[DataRequired()])
    category = SelectField('Category', choices=CATEGORIES, validators=[DataRequired()])
    closing_date = DateTimeField('Closing date', format=DATE_FORMATS, validators=[DataRequired()])
    resolution_date = DateTimeField('Resolution date', format=DATE_FORMATS, validators=[DataRequired()])
    resolution_source = StringField('Resolution source', filters=[as_text], validators=[DataRequired()])
    initial_yes_price = FloatField('Initial YES price', default=50,
                                   validators=[Optional(), NumberRange(min=1, max=99)])
    fee = FloatField('Fee', default=2, validators=[Optional(), NumberRange(min=0, max=10)])
    image_url = StringField('Image URL', filters=[as_text], validators=[Optional(), URL()])

    def validate_closing_date(self, field):
        if field.data and self.resolution_date.data and field.data > self.resolution_date.data:
            raise ValidationError('Closing date must be before resolution date')


class ResolveEventForm(FlaskForm):
    outcome = SelectField('Outcome', choices=['yes', 'no'], filters=[lambda v: v.lower() if isinstance(v, str) else v])

import math

from flask_wtf import FlaskForm
from wtforms import StringField, FloatField, SelectField
from wtforms.validators import DataRequired, Length, ValidationError

from predictx.utils.enums import PaymentMethod
from predictx.utils.validators import as_text


def positive_amount(form, field):
    if field.data is not None and (not math.isfinite(field.data) or field.data <= 0):
        raise ValidationError('Please enter a valid amount')


class DepositForm(FlaskForm):
    amount = FloatField('Amount', validators=[DataRequired(message='Please enter a valid amount'), positive_amount])
    payment_method = SelectField('Payment method', default=PaymentMethod.CARD.value,
                                 choices=[m.value for m in PaymentMethod])


class WithdrawForm(FlaskForm):
    amount = FloatField('Amount', validators=[DataRequired(message='Please enter a valid amount'), positive_amount])
    account_number = StringField('Account number', filters=[as_text], validators=[
        DataRequired(message='Please enter a valid account number'),
        Length(min=9, message='Please enter a valid account number')
    ])
    ifsc_code = StringField('IFSC code', filters=[as_text, lambda v: v.upper() if v else v], validators=[
        DataRequired(message='Please enter a valid IFSC code'),
        Length(min=11, message='Please enter a valid IFSC code')
    ])

from flask_wtf import FlaskForm
from wtforms import StringField, PasswordField
from wtforms.validators import DataRequired, Length, Email

from predictx.utils.validators import as_text, as_secret


class RegistrationForm(FlaskForm):
    name = StringField('Name', filters=[as_text], validators=[DataRequired(), Length(max=100)])
    email = StringField('Email', filters=[as_text], validators=[DataRequired(), Email()])
    password = PasswordField('Password', filters=[as_secret], validators=[DataRequired(), Length(min=6)])


class LoginForm(FlaskForm):
    email = StringField('Email', filters=[as_text], validators=[DataRequired()])
    password = PasswordField('Password', filters=[as_secret], validators=[DataRequired()])

from marshmallow import EXCLUDE, fields, validate

from ptconnect.extensions import ma
from ptconnect.models import Profile


class ProfileSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = Profile
        exclude = ("password_hash", "created_at", "updated_at")


class LoginSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)
    password = fields.Str(required=True, validate=validate.Length(min=1))


class ClientCreateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    name = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    email = fields.Email(required=True)
    password = fields.Str(allow_none=True, load_default=None, validate=validate.Length(min=8))


class ClientUpdateSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    client_id = fields.Int(data_key="clientId", required=True)
    name = fields.Str(allow_none=True, load_default=None, validate=validate.Length(min=1, max=150))
    email = fields.Email(allow_none=True, load_default=None)


profile_schema = ProfileSchema()
login_schema = LoginSchema()
client_create_schema = ClientCreateSchema()
client_update_schema = ClientUpdateSchema()

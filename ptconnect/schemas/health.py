from marshmallow import EXCLUDE, fields, validate

from ptconnect.extensions import ma
from ptconnect.models import ClientHealthLog
from ptconnect.models.health_log import HEALTH_STATUSES


class HealthLogInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    client_id = fields.Int(data_key="clientId", required=True)
    injury_title = fields.Str(data_key="injuryTitle", required=True, validate=validate.Length(min=1, max=150))
    details = fields.Str(allow_none=True, load_default=None)
    status = fields.Str(required=True, validate=validate.OneOf(HEALTH_STATUSES))
    severity = fields.Str(allow_none=True, load_default=None)


class HealthLogSchema(ma.SQLAlchemyAutoSchema):
    class Meta:
        model = ClientHealthLog
        include_fk = True


health_log_input_schema = HealthLogInputSchema()
health_log_schema = HealthLogSchema()
health_logs_schema = HealthLogSchema(many=True)

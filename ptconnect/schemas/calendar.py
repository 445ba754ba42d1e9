from marshmallow import EXCLUDE, fields, validate

from ptconnect.extensions import ma
from ptconnect.models.calendar_event import EVENT_TYPES


class CalendarEventInputSchema(ma.Schema):
    class Meta:
        unknown = EXCLUDE

    title = fields.Str(required=True, validate=validate.Length(min=1, max=150))
    type = fields.Str(required=True, validate=validate.OneOf(EVENT_TYPES))
    start_date = fields.DateTime(data_key="startDate", required=True)
    end_date = fields.DateTime(data_key="endDate", required=True)
    client_id = fields.Int(data_key="clientId", allow_none=True, load_default=None)
    recurrence_rule = fields.Str(data_key="recurrenceRule", allow_none=True, load_default=None)
    notes = fields.Str(allow_none=True, load_default=None)
    location = fields.Str(allow_none=True, load_default=None)
    is_all_day = fields.Bool(data_key="isAllDay", load_default=False)


calendar_event_input_schema = CalendarEventInputSchema()

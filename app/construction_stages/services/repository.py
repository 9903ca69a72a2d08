# app/construction_stages/services/repository.py
import structlog
from sqlalchemy import DateTime, bindparam, text
from sqlalchemy.exc import SQLAlchemyError

from ..exceptions import NotFoundError, ValidationError
from .mapper import compute_duration, parse_iso_8601, row_to_record
from .validation import MESSAGES, apply_defaults, ensure_valid_status, is_empty, validate_fields

logger = structlog.get_logger(__name__)

# External field -> table column. 'duration' and 'id' are never written from input.
FIELD_COLUMNS = {
    'name': 'name',
    'startDate': 'start_date',
    'endDate': 'end_date',
    'durationUnit': 'durationUnit',
    'color': 'color',
    'externalId': 'externalId',
    'status': 'status',
}
DATE_COLUMNS = ('start_date', 'end_date')

SELECT_STAGES = """
    SELECT ID, name, start_date, end_date, duration, durationUnit, color, externalId, status
    FROM construction_stages
"""


def _select(where_sql=''):
    return text(SELECT_STAGES + where_sql).columns(start_date=DateTime, end_date=DateTime)


def _typed(statement, columns):
    """Binds date columns as DateTime so every engine stores native timestamps."""
    date_params = [bindparam(c, type_=DateTime) for c in DATE_COLUMNS if c in columns]
    return statement.bindparams(*date_params) if date_params else statement


class ConstructionStageRepository:
    """Reads and writes the construction_stages table through an injected SQLAlchemy session."""

    def __init__(self, session):
        self.session = session

    def list_all(self):
        result = self.session.execute(_select('ORDER BY ID'))
        return [row_to_record(row._mapping) for row in result]

    def get_by_id(self, stage_id):
        row = self._fetch_row(stage_id)
        return row_to_record(row) if row else None

    def create(self, data):
        errors = validate_fields(data, creating=True)
        if errors:
            logger.info("stage_validation_failed", operation="create", fields=sorted(errors))
            raise ValidationError(errors)

        record = apply_defaults(data)
        start = parse_iso_8601(record['startDate'])
        end = None if is_empty(record.get('endDate')) else parse_iso_8601(record['endDate'])

        params = {
            'name': record['name'],
            'start_date': start,
            'end_date': end,
            'duration': compute_duration(start, end),
            'durationUnit': record['durationUnit'],
            'color': record.get('color') or None,
            'externalId': record.get('externalId') or None,
            'status': record['status'],
        }
        statement = _typed(text("""
            INSERT INTO construction_stages
                (name, start_date, end_date, duration, durationUnit, color, externalId, status)
                VALUES (:name, :start_date, :end_date, :duration, :durationUnit, :color, :externalId, :status)
        """), params)
        result = self._execute_write(statement, params, operation="create")
        stage_id = result.lastrowid
        logger.info("stage_created", stage_id=stage_id, duration=params['duration'])
        return self.get_by_id(stage_id)

    def update(self, data, stage_id):
        """
        Applies a sparse patch: absent keys stay untouched, None or '' clears a
        nullable field, anything else is written. Duration is recomputed when
        either date changes.
        """
        errors = validate_fields(data)
        if errors:
            logger.info("stage_validation_failed", operation="update", stage_id=stage_id, fields=sorted(errors))
            raise ValidationError(errors)
        if 'status' in data:
            ensure_valid_status(data['status'])

        current = self._fetch_row(stage_id)
        if current is None:
            raise NotFoundError(stage_id)

        changes = {}
        for field, column in FIELD_COLUMNS.items():
            if field not in data:
                continue
            value = None if is_empty(data[field]) else data[field]
            if column in DATE_COLUMNS and value is not None:
                value = parse_iso_8601(value)
            changes[column] = value

        if 'start_date' in changes or 'end_date' in changes:
            start = changes.get('start_date', current['start_date'])
            end = changes['end_date'] if 'end_date' in changes else current['end_date']
            # Only one date in the patch: order is checked against the stored one
            if end is not None and end <= start:
                message = MESSAGES['later_than'].format(field='endDate', param='startDate')
                logger.info("stage_validation_failed", operation="update", stage_id=stage_id, fields=['endDate'])
                raise ValidationError({'endDate': [message]})
            changes['duration'] = compute_duration(start, end)

        if not changes:
            return row_to_record(current)

        set_sql = ', '.join(f"{column} = :{column}" for column in changes)
        statement = _typed(text(f"UPDATE construction_stages SET {set_sql} WHERE ID = :id"), changes)
        self._execute_write(statement, {**changes, 'id': stage_id}, operation="update")
        logger.info("stage_updated", stage_id=stage_id, columns=sorted(changes))
        return self.get_by_id(stage_id)

    def delete(self, stage_id):
        """Soft delete: the row stays, its status becomes DELETED."""
        statement = text("UPDATE construction_stages SET status = 'DELETED' WHERE ID = :id")
        result = self._execute_write(statement, {'id': stage_id}, operation="delete")
        if result.rowcount == 0:
            raise NotFoundError(stage_id)
        logger.info("stage_deleted", stage_id=stage_id)
        return f"Construction stage with ID {stage_id} has been deleted"

    def _fetch_row(self, stage_id):
        row = self.session.execute(_select('WHERE ID = :id'), {'id': stage_id}).fetchone()
        return row._mapping if row else None

    def _execute_write(self, statement, params, operation):
        try:
            result = self.session.execute(statement, params)
            self.session.commit()
        except SQLAlchemyError:
            self.session.rollback()
            logger.exception("stage_storage_error", operation=operation)
            raise
        return result

# /app/construction_stages/models.py
from app import db

STATUSES = ('NEW', 'PLANNED', 'DELETED')
DURATION_UNITS = ('HOURS', 'DAYS', 'WEEKS')


def _in_clause(column, values):
    quoted = ', '.join(f"'{v}'" for v in values)
    return f"{column} IN ({quoted})"


class ConstructionStage(db.Model):
    __tablename__ = 'construction_stages'
    __table_args__ = (
        db.CheckConstraint(_in_clause('status', STATUSES), name='ck_construction_stages_status'),
        db.CheckConstraint(_in_clause('durationUnit', DURATION_UNITS), name='ck_construction_stages_duration_unit'),
    )

    id = db.Column('ID', db.Integer, primary_key=True, autoincrement=True)
    name = db.Column(db.String(255), nullable=False)
    start_date = db.Column(db.DateTime, nullable=False)
    end_date = db.Column(db.DateTime, nullable=True)
    duration = db.Column(db.Integer, nullable=True)
    duration_unit = db.Column('durationUnit', db.String(5), nullable=False, default='DAYS')
    color = db.Column(db.String(7), nullable=True)
    external_id = db.Column('externalId', db.String(255), nullable=True)
    status = db.Column(db.String(7), nullable=False, default='NEW')

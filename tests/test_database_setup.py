from sqlalchemy import inspect, text

from app import db


def test_init_db_command_recreates_table(app):
    db.session.execute(text(
        "INSERT INTO construction_stages (name, start_date, durationUnit, status) "
        "VALUES ('Old', '2024-01-01 00:00:00.000000', 'DAYS', 'NEW')"
    ))
    db.session.commit()

    result = app.test_cli_runner().invoke(args=["init-db"])

    assert "Database has been reset." in result.output
    assert "construction_stages" in inspect(db.engine).get_table_names()
    count = db.session.execute(text("SELECT COUNT(*) FROM construction_stages")).scalar_one()
    assert count == 0

from unittest.mock import patch

from sqlalchemy import inspect

import app as entry_point
from xendit_gateway.models import GatewayLog, db


def test_gateway_log_schema_matches_migration(app):
    indexes = {ix['name'] for ix in inspect(db.engine).get_indexes('gateway_log')}
    assert 'ix_gateway_log_external_id' in indexes
    assert GatewayLog.__table__.c.created_at.server_default is not None


def test_contact_number_is_indexed_by_contact(app):
    indexes = {ix['name'] for ix in inspect(db.engine).get_indexes('contact_number')}
    assert 'ix_contact_number_contact_id' in indexes


def test_startup_migrations_report_created_tables(app, monkeypatch):
    db.drop_all()
    monkeypatch.setattr(entry_point, 'app', app)

    with patch('flask_migrate.upgrade', side_effect=db.create_all):
        created = entry_point.run_migrations_on_startup()

    assert created == ['contact_number', 'gateway_log']


def test_startup_migrations_report_nothing_when_up_to_date(app, monkeypatch):
    monkeypatch.setattr(entry_point, 'app', app)

    with patch('flask_migrate.upgrade'):
        assert entry_point.run_migrations_on_startup() == []


def test_startup_migration_failure_is_logged_not_raised(app, monkeypatch):
    monkeypatch.setattr(entry_point, 'app', app)

    with patch('flask_migrate.upgrade', side_effect=RuntimeError('no alembic env')):
        assert entry_point.run_migrations_on_startup() == []

from xendit_gateway import create_app
from xendit_gateway.models import db
import os

app = create_app()

GATEWAY_TABLES = ('contact_number', 'gateway_log')


def run_migrations_on_startup():
    """Apply pending Alembic revisions and report which gateway tables they created."""
    from flask_migrate import upgrade
    from sqlalchemy import inspect
    with app.app_context():
        before = set(inspect(db.engine).get_table_names())
        try:
            upgrade()
        except Exception as e:  # noqa: BLE001
            app.logger.error('Migration error (continuing anyway): %s', e)
            return []
        after = set(inspect(db.engine).get_table_names())
    created = [t for t in GATEWAY_TABLES if t in after and t not in before]
    missing = [t for t in GATEWAY_TABLES if t not in after]
    app.logger.info('Gateway migrations applied created=%s missing=%s', created or '-', missing or '-')
    return created


if __name__ == "__main__":
    # Run migrations on startup if in production
    if os.getenv('RENDER'):  # Render sets this environment variable
        run_migrations_on_startup()

    app.run(host="0.0.0.0", port=8000, debug=False)

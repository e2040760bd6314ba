import logging

from alembic import context
from flask import current_app

config = context.config

# Logging is configured by the app (solhub_admin.config.setup_logging)
for name in ("alembic", "alembic.runtime.migration"):
    lg = logging.getLogger(name)
    lg.handlers = []
    lg.propagate = True

migrate_db = current_app.extensions["migrate"].db
target_metadata = migrate_db.metadata


def run_migrations_offline():
    """Emit SQL to stdout instead of running it."""
    context.configure(
        url=str(migrate_db.engine.url).replace("%", "%%"),
        target_metadata=target_metadata,
        literal_binds=True,
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    """Run migrations in 'online' mode."""
    with migrate_db.engine.connect() as connection:
        context.configure(
            connection=connection,
            target_metadata=target_metadata,
            compare_type=True,
        )

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

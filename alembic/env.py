"""Alembic environment configuration."""

from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from achievehub.config import settings
from achievehub.db.base import Base

# Import all models to ensure they are registered
from achievehub import models  # noqa: F401

# Alembic Config object
config = context.config

# Interpret the config file for Python logging
if config.config_file_name is not None:
    fileConfig(config.config_file_name)

# Target metadata
target_metadata = Base.metadata


def sync_database_url(url: str) -> str:
    """Convert the asyncpg URL used by the app to a psycopg2 one."""
    if not url.startswith("postgresql+asyncpg://"):
        return url
    url = url.replace("postgresql+asyncpg://", "postgresql://")
    # asyncpg uses 'ssl=false/true/require', psycopg2 uses 'sslmode=disable/require'
    for sep in ("?", "&"):
        url = url.replace(f"{sep}ssl=false", f"{sep}sslmode=disable")
        url = url.replace(f"{sep}ssl=true", f"{sep}sslmode=require")
        url = url.replace(f"{sep}ssl=require", f"{sep}sslmode=require")
    return url


config.set_main_option("sqlalchemy.url", sync_database_url(settings.DATABASE_URL))


def run_migrations_offline() -> None:
    """Run migrations in 'offline' mode."""
    context.configure(
        url=config.get_main_option("sqlalchemy.url"),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={"paramstyle": "named"},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online() -> None:
    """Run migrations in 'online' mode."""
    connectable = engine_from_config(
        config.get_section(config.config_ini_section, {}),
        prefix="sqlalchemy.",
        poolclass=pool.NullPool,
    )

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()

"""Flask application factory."""
import logging

from flask import Flask

from salon.database import init_db


def create_app(config_object='config.Config'):
    """Create and configure the Flask application."""
    app = Flask(__name__)
    app.config.from_object(config_object)

    logging.basicConfig(
        level=app.config.get('LOG_LEVEL', 'INFO'),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s'
    )

    # Initialize database (backs the 'sql' storage backend)
    if app.config.get('STORAGE_BACKEND', 'sql') == 'sql':
        init_db(app)

    # Key-value store
    from salon.services.kv_store import init_storage
    store = init_storage(app)

    # Accounts, session context and tenant data
    from salon.services.account_service import AccountService
    from salon.services.session_service import AuthContext, SessionManager
    from salon.services.resource_service import TenantDataset

    accounts = AccountService.from_config(store, app.config)
    if app.config.get('AUTO_MIGRATE', True):
        accounts.migrate_accounts()

    auth = AuthContext(accounts, SessionManager(store))
    app.extensions['accounts'] = accounts
    app.extensions['auth'] = auth
    app.extensions['dataset'] = TenantDataset(auth, store)

    # Register CLI commands
    from salon.cli_commands import init_cli_commands
    init_cli_commands(app)

    app.logger.info(f"STORAGE_BACKEND={app.config.get('STORAGE_BACKEND')}")
    app.logger.info(f"STORAGE_KEY_PREFIX={app.config.get('STORAGE_KEY_PREFIX')}")

    return app

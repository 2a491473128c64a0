"""
Startup tests — migrations run in-process without touching the app's logging.
"""

import logging

from cart_configurator.main import _run_migrations


def test_migrations_keep_app_logging(caplog):
    caplog.set_level(logging.INFO)
    root = logging.getLogger()

    _run_migrations()

    assert root.level == logging.INFO
    assert caplog.handler in root.handlers
    messages = [r.getMessage() for r in caplog.records if r.name == "cart_configurator"]
    assert "Migrations complete" in messages

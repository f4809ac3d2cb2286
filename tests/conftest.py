import os
import tempfile

os.environ['DATABASE_URL'] = 'sqlite:///:memory:'
os.environ.setdefault('SECRET_KEY', 'test-secret')
os.environ.setdefault('APP_LOG_DIR', tempfile.mkdtemp(prefix='tarefas-test-logs-'))

import pytest

from app import app, db


@pytest.fixture()
def client():
    """Test client over a freshly created in-memory database."""
    app.config['TESTING'] = True
    with app.app_context():
        db.drop_all()
        db.create_all()
    return app.test_client()

import pytest
from cachelib import SimpleCache

from config import TestConfig
from rentdrive import create_app, db
from rentdrive import models  # noqa: F401


@pytest.fixture
def app(tmp_path):
    class _Config(TestConfig):
        UPLOAD_FOLDER = str(tmp_path / 'uploads')
        SESSION_CACHELIB = SimpleCache()

    app = create_app(_Config)
    with app.app_context():
        db.create_all()

    # requests must push their own app context so flask-login's g is not shared
    yield app

    with app.app_context():
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def fresh(app):
    """Read one row through the ORM after requests have committed."""
    def _get(model, pk):
        with app.app_context():
            return db.session.get(model, pk)
    return _get


@pytest.fixture
def rows(app):
    def _all(model):
        with app.app_context():
            return db.session.execute(db.select(model).order_by(model.id)).scalars().all()
    return _all


@pytest.fixture
def logged_in(app):
    """Return a new test client already logged in with the given credentials."""
    def _client(email, password):
        c = app.test_client()
        resp = login(c, email, password)
        assert resp.status_code == 302
        return c
    return _client


def register_user(client, **overrides):
    data = {'fullname': 'Alice', 'email': 'a@x.com', 'password': 'p1', 'phone': '1', 'city': 'X'}
    data.update(overrides)
    return client.post('/register', data=data)


def register_driver(client, **overrides):
    data = {'fullname': 'Dan', 'email': 'd@x.com', 'password': 'dp', 'phone': '2', 'city': 'X',
            'org_type': 'Independent'}
    data.update(overrides)
    return client.post('/driver-register', data=data, content_type='multipart/form-data')


def register_org(client, **overrides):
    data = {'company_name': 'Fleet Co', 'reg_number': 'R-1', 'email': 'o@x.com', 'phone': '3',
            'password': 'op'}
    data.update(overrides)
    return client.post('/org-register', data=data)


def login(client, email, password):
    return client.post('/login', data={'email': email, 'password': password})


def session_key(client):
    with client.session_transaction() as sess:
        return sess.get('_user_id')

"""
Registration, login and the session gate
Run with: pytest tests/test_auth.py -v
"""
from werkzeug.security import check_password_hash

from conftest import login, register_driver, register_org, register_user, session_key
from rentdrive.models import Driver, Organization, User


class TestRegistration:

    def test_user_registration_acknowledges_and_points_to_login(self, client):
        resp = register_user(client)
        assert resp.status_code == 200
        assert b'Registration Successful!' in resp.data
        assert b'"/login"' in resp.data

    def test_password_is_stored_hashed(self, client, rows):
        register_user(client)
        user = rows(User)[0]
        assert user.password_hash != 'p1'
        assert check_password_hash(user.password_hash, 'p1')

    def test_missing_fields_are_rejected_without_insert(self, client, rows):
        resp = register_user(client, email='')
        assert resp.status_code == 200
        assert b'required' in resp.data
        assert rows(User) == []

    def test_duplicate_email_is_a_store_failure(self, client, rows):
        register_user(client)
        resp = register_user(client, fullname='Other')
        assert resp.status_code == 500
        assert resp.data == b'Error registering user.'
        assert len(rows(User)) == 1

    def test_org_registration(self, client, rows):
        resp = register_org(client)
        assert b'Organization registered successfully!' in resp.data
        org = rows(Organization)[0]
        assert org.company_name == 'Fleet Co'
        assert org.reg_number == 'R-1'

    def test_driver_registration_with_organization(self, client, rows):
        register_org(client)
        org_id = rows(Organization)[0].id
        resp = register_driver(client, org_type='Organization', organization_id=str(org_id))
        assert b'Driver registration successful!' in resp.data
        driver = rows(Driver)[0]
        assert driver.org_type == 'Organization'
        assert driver.organization_id == org_id
        assert driver.license_file is None

    def test_independent_driver_ignores_organization_id(self, client, rows):
        register_driver(client, organization_id='7')
        assert rows(Driver)[0].organization_id is None

    def test_bad_organization_id(self, client, rows):
        resp = register_driver(client, org_type='Organization', organization_id='abc')
        assert b'Organization ID must be a number.' in resp.data
        assert rows(Driver) == []


class TestLogin:

    def test_user_login_establishes_user_session(self, client):
        register_user(client)
        resp = login(client, 'a@x.com', 'p1')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/dashboard')
        assert session_key(client) == 'user:1'

    def test_driver_login_establishes_driver_session(self, client):
        register_driver(client)
        login(client, 'd@x.com', 'dp')
        assert session_key(client) == 'driver:1'

    def test_org_login_establishes_org_session(self, client):
        register_org(client)
        login(client, 'o@x.com', 'op')
        assert session_key(client) == 'organization:1'

    def test_wrong_password_and_unknown_email_look_the_same(self, client):
        register_user(client)
        wrong = login(client, 'a@x.com', 'nope')
        unknown = login(client, 'nobody@x.com', 'p1')
        assert wrong.status_code == unknown.status_code == 200
        assert wrong.data == unknown.data
        assert b'Invalid credentials!' in wrong.data
        assert session_key(client) is None

    def test_empty_credentials(self, client):
        resp = login(client, '', '')
        assert b'Invalid credentials!' in resp.data

    def test_probe_falls_through_to_next_table(self, client):
        # same email as rider and driver; the password decides the role
        register_user(client, email='same@x.com', password='rider')
        register_driver(client, email='same@x.com', password='driver')
        login(client, 'same@x.com', 'driver')
        assert session_key(client) == 'driver:1'

    def test_rider_table_is_probed_first(self, client):
        register_user(client, email='same@x.com', password='pw')
        register_driver(client, email='same@x.com', password='pw')
        login(client, 'same@x.com', 'pw')
        assert session_key(client) == 'user:1'

    def test_login_page_redirects_when_authenticated(self, client):
        register_user(client)
        login(client, 'a@x.com', 'p1')
        resp = client.get('/login')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/dashboard')


class TestGate:

    def test_dashboard_requires_login(self, client):
        resp = client.get('/dashboard')
        assert resp.status_code == 302
        assert '/login' in resp.headers['Location']

    def test_protected_posts_require_login(self, client):
        for path in ('/book', '/confirm-ride', '/cancel-ride',
                     '/org/add-driver', '/org/update-driver', '/org/delete-driver'):
            resp = client.post(path, data={})
            assert resp.status_code == 302, path
            assert '/login' in resp.headers['Location']

    def test_logout_destroys_session(self, client):
        register_user(client)
        login(client, 'a@x.com', 'p1')
        resp = client.get('/logout')
        assert resp.status_code == 302
        assert resp.headers['Location'].endswith('/login')
        assert session_key(client) is None
        assert client.get('/dashboard').status_code == 302

    def test_logged_out_cookie_cannot_be_replayed(self, app, client):
        register_user(client)
        login(client, 'a@x.com', 'p1')
        cookie = client.get_cookie('session')
        assert cookie is not None

        copy = app.test_client()
        copy.set_cookie('session', cookie.value)
        assert copy.get('/dashboard').status_code == 200

        client.get('/logout')

        replay = app.test_client()
        replay.set_cookie('session', cookie.value)
        resp = replay.get('/dashboard')
        assert resp.status_code == 302
        assert '/login' in resp.headers['Location']

    def test_session_of_deleted_account_is_dropped(self, client, logged_in, rows):
        register_org(client)
        org = logged_in('o@x.com', 'op')
        org.post('/org/add-driver', data={'fullname': 'Gone', 'email': 'g@x.com', 'password': 'gp'})
        driver_id = rows(Driver)[0].id

        driver = logged_in('g@x.com', 'gp')
        assert driver.get('/dashboard').status_code == 200

        org.post('/org/delete-driver', data={'id': str(driver_id)})
        resp = driver.get('/dashboard')
        assert resp.status_code == 302
        assert '/login' in resp.headers['Location']

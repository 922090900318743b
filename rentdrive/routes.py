# rentdrive/routes.py
import logging

from flask import Blueprint, redirect, render_template, request, url_for
from flask_login import current_user, login_required
from sqlalchemy.exc import SQLAlchemyError
from werkzeug.exceptions import InternalServerError, RequestEntityTooLarge

from . import db
from . import auth
from . import repositories as repo
from .auth import roles_required
from .uploads import UploadRejected, discard_license, save_license
from .utils import alert_redirect, missing_fields

bp = Blueprint('main', __name__)

logger = logging.getLogger('rentdrive.routes')
security_logger = logging.getLogger('rentdrive.security')


def store_failure(message):
    db.session.rollback()
    logger.exception(message)
    return message, 500


def _form_int(name):
    return request.form.get(name, type=int)


# ---- Public pages ----
@bp.route('/')
def home():
    return redirect(url_for('main.index'))


@bp.route('/index')
def index():
    return render_template('index.html')


@bp.route('/about')
def about():
    return render_template('about.html')


@bp.route('/car-list')
def car_list():
    return render_template('car-list.html')


@bp.route('/contact')
def contact():
    return render_template('contact.html')


@bp.route('/registration')
def registration():
    return render_template('registration.html')


@bp.route('/driver-registration')
def driver_registration():
    return render_template('driver-registration.html')


@bp.route('/organization-registration')
def organization_registration():
    return render_template('organization-registration.html')


@bp.route('/contact-submit', methods=['POST'])
def contact_submit():
    logger.info(
        "Contact form: name=%s email=%s phone=%s message=%s",
        request.form.get('name'),
        request.form.get('email'),
        request.form.get('phone'),
        request.form.get('message')
    )
    return alert_redirect('Message received!', '/index')


# ---- Registration ----
@bp.route('/register', methods=['POST'])
def register():
    form = request.form
    if missing_fields(form, ('fullname', 'email', 'password')):
        return alert_redirect('Full name, email and password are required.', '/registration')

    try:
        repo.insert_user(
            form['fullname'].strip(),
            form['email'].strip(),
            auth.hash_password(form['password']),
            form.get('phone'),
            form.get('city')
        )
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error registering user.")

    logger.info("Registered user %s", form['email'])
    return alert_redirect('Registration Successful! Redirecting...', '/login')


@bp.route('/driver-register', methods=['POST'])
def driver_register():
    form = request.form
    if missing_fields(form, ('fullname', 'email', 'password')):
        return alert_redirect('Full name, email and password are required.', '/driver-registration')

    org_type = form.get('org_type') or 'Independent'
    organization_id = None
    if org_type == 'Organization' and form.get('organization_id'):
        organization_id = _form_int('organization_id')
        if organization_id is None:
            return alert_redirect('Organization ID must be a number.', '/driver-registration')

    try:
        license_file = save_license(request.files.get('driver_license'))
    except UploadRejected as e:
        return alert_redirect(str(e), '/driver-registration')

    try:
        repo.insert_driver(
            form['fullname'].strip(),
            form['email'].strip(),
            auth.hash_password(form['password']),
            form.get('phone'),
            form.get('city'),
            org_type,
            organization_id,
            license_file
        )
        db.session.commit()
    except SQLAlchemyError:
        discard_license(license_file)
        return store_failure("Error registering driver.")

    logger.info("Registered driver %s (license: %s)", form['email'], license_file)
    return alert_redirect('Driver registration successful!', '/login')


@bp.route('/org-register', methods=['POST'])
def org_register():
    form = request.form
    if missing_fields(form, ('company_name', 'email', 'password')):
        return alert_redirect('Company name, email and password are required.', '/organization-registration')

    try:
        repo.insert_organization(
            form['company_name'].strip(),
            form.get('reg_number'),
            form['email'].strip(),
            auth.hash_password(form['password']),
            form.get('phone')
        )
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error registering organization.")

    logger.info("Registered organization %s", form['email'])
    return alert_redirect('Organization registered successfully!', '/login')


# ---- Login / logout ----
@bp.route('/login', methods=['GET'])
def login():
    if current_user.is_authenticated:
        return redirect(url_for('main.dashboard'))
    return render_template('login.html')


@bp.route('/login', methods=['POST'])
def login_submit():
    email = (request.form.get('email') or '').strip()
    password = request.form.get('password') or ''

    try:
        identity = auth.authenticate(email, password) if email and password else None
    except SQLAlchemyError:
        return store_failure("Error during login.")

    if identity is None:
        return alert_redirect('Invalid credentials!', '/login')

    auth.login(identity)
    logger.info("Login %r", identity)
    return redirect(url_for('main.dashboard'))


@bp.route('/logout')
def logout():
    auth.destroy()
    return redirect(url_for('main.login'))


# ---- Role-based dashboards ----
@bp.route('/dashboard')
@login_required
def dashboard():
    identity = auth.current()
    try:
        if identity.role == 'user':
            bookings = repo.user_bookings(identity.id)
            drivers = repo.list_drivers()
            return render_template('dashboard.html', user=identity, bookings=bookings, drivers=drivers)

        if identity.role == 'driver':
            rides = repo.driver_rides(identity.id)
            return render_template('dashboard-driver.html', user=identity, rides=rides)

        if identity.role == 'organization':
            drivers = repo.list_org_drivers(identity.id)
            return render_template('dashboard-org.html', user=identity, drivers=drivers)
    except SQLAlchemyError:
        return store_failure("Error loading dashboard")

    return redirect(url_for('main.login'))


# ---- Booking lifecycle ----
@bp.route('/book', methods=['POST'])
@login_required
@roles_required('user')
def book():
    form = request.form
    if missing_fields(form, ('pickup_address', 'drop_address')):
        return alert_redirect('Pickup and drop addresses are required.', '/dashboard')

    identity = auth.current()
    try:
        rider = repo.get_user(identity.id)
        driver_id = repo.pick_driver(rider.city if rider else None)
        repo.insert_booking(
            identity.id,
            driver_id,
            form['pickup_address'].strip(),
            form['drop_address'].strip(),
            form.get('pickup_time'),
            form.get('start_date'),
            form.get('end_date')
        )
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error creating booking.")

    logger.info("Booking created by user %s, driver %s", identity.id, driver_id)
    return alert_redirect('Ride booked successfully!', '/dashboard')


@bp.route('/confirm-ride', methods=['POST'])
@login_required
@roles_required('driver')
def confirm_ride():
    booking_id = _form_int('booking_id')
    if booking_id is None:
        return alert_redirect('Invalid booking.', '/dashboard')

    identity = auth.current()
    try:
        updated = repo.confirm_booking(booking_id, identity.id)
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error confirming ride.")

    if not updated:
        return alert_redirect('This ride can no longer be confirmed.', '/dashboard')

    logger.info("Booking %s confirmed by driver %s", booking_id, identity.id)
    return alert_redirect('Ride confirmed successfully!', '/dashboard')


@bp.route('/cancel-ride', methods=['POST'])
@login_required
@roles_required('user')
def cancel_ride():
    booking_id = _form_int('booking_id')
    if booking_id is None:
        return alert_redirect('Invalid booking.', '/dashboard')

    identity = auth.current()
    try:
        updated = repo.cancel_booking(booking_id, identity.id)
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error cancelling ride.")

    if not updated:
        security_logger.warning("User %s tried to cancel booking %s", identity.id, booking_id)
    return alert_redirect('Ride cancelled successfully.', '/dashboard')


# ---- Organization driver roster ----
@bp.route('/org/add-driver', methods=['POST'])
@login_required
@roles_required('organization')
def org_add_driver():
    form = request.form
    if missing_fields(form, ('fullname', 'email', 'password')):
        return alert_redirect('Full name, email and password are required.', '/dashboard')

    identity = auth.current()
    try:
        repo.insert_driver(
            form['fullname'].strip(),
            form['email'].strip(),
            auth.hash_password(form['password']),
            form.get('phone'),
            form.get('city'),
            'Organization',
            identity.id
        )
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error adding driver.")

    return alert_redirect('Driver added successfully!', '/dashboard')


@bp.route('/org/update-driver', methods=['POST'])
@login_required
@roles_required('organization')
def org_update_driver():
    form = request.form
    driver_id = _form_int('id')
    if driver_id is None:
        return alert_redirect('Invalid driver.', '/dashboard')
    if missing_fields(form, ('fullname', 'email')):
        return alert_redirect('Full name and email are required.', '/dashboard')

    identity = auth.current()
    try:
        updated = repo.update_org_driver(
            driver_id,
            identity.id,
            form['fullname'].strip(),
            form['email'].strip(),
            form.get('phone'),
            form.get('city')
        )
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error updating driver.")

    if not updated:
        security_logger.warning("Organization %s tried to update driver %s", identity.id, driver_id)
    return alert_redirect('Driver updated successfully!', '/dashboard')


@bp.route('/org/delete-driver', methods=['POST'])
@login_required
@roles_required('organization')
def org_delete_driver():
    driver_id = _form_int('id')
    if driver_id is None:
        return alert_redirect('Invalid driver.', '/dashboard')

    identity = auth.current()
    try:
        deleted = repo.delete_org_driver(driver_id, identity.id)
        db.session.commit()
    except SQLAlchemyError:
        return store_failure("Error deleting driver.")

    if not deleted:
        security_logger.warning("Organization %s tried to delete driver %s", identity.id, driver_id)
    return alert_redirect('Driver deleted successfully!', '/dashboard')


def register_error_handlers(app):
    @app.errorhandler(RequestEntityTooLarge)
    def too_large(error):
        return "Uploaded file is too large.", 413

    @app.errorhandler(InternalServerError)
    def internal_error(error):
        db.session.rollback()
        return "Internal server error.", 500

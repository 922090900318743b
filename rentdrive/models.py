# rentdrive/models.py
from . import db

BOOKING_STATUSES = ('Scheduled', 'Confirmed', 'Cancelled')
ORG_TYPES = ('Independent', 'Organization')


# ---- User (rider) ----
class User(db.Model):
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    fullname = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(40))
    city = db.Column(db.String(120))


# ---- Organization ----
class Organization(db.Model):
    __tablename__ = 'organizations'

    id = db.Column(db.Integer, primary_key=True)
    company_name = db.Column(db.String(200), nullable=False)
    reg_number = db.Column(db.String(80))
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(40))


# ---- Driver ----
class Driver(db.Model):
    __tablename__ = 'drivers'

    id = db.Column(db.Integer, primary_key=True)
    fullname = db.Column(db.String(120), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    password_hash = db.Column(db.String(255), nullable=False)
    phone = db.Column(db.String(40))
    city = db.Column(db.String(120))
    org_type = db.Column(db.String(20), nullable=False, default='Independent')
    organization_id = db.Column(db.Integer, db.ForeignKey('organizations.id'), nullable=True)
    license_file = db.Column(db.String(255), nullable=True)


# ---- Booking ----
class Booking(db.Model):
    __tablename__ = 'bookings'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False)
    driver_id = db.Column(db.Integer, db.ForeignKey('drivers.id'), nullable=True)
    pickup_address = db.Column(db.String(255), nullable=False)
    drop_address = db.Column(db.String(255), nullable=False)
    pickup_time = db.Column(db.String(20))
    start_date = db.Column(db.String(20))
    end_date = db.Column(db.String(20))
    status = db.Column(db.String(20), nullable=False, default='Scheduled')
    confirmed = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, server_default=db.func.now())

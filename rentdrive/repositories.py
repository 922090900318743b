# rentdrive/repositories.py
"""Table-scoped SQL for users, drivers, organizations and bookings.

Every statement is a parameterized ``text()`` query run on ``db.session``.
Nothing here commits: the route handler owns the unit of work and commits or
rolls back once per request. Owner-scoped mutations return the number of
rows they touched so callers can tell a no-op from a change.
"""
from sqlalchemy import text

from . import db


# ---- Users ----------------------------------------------------------------
def insert_user(fullname, email, password_hash, phone, city):
    db.session.execute(
        text("""
            INSERT INTO users (fullname, email, password_hash, phone, city)
            VALUES (:fullname, :email, :pw, :phone, :city)
        """),
        {"fullname": fullname, "email": email, "pw": password_hash, "phone": phone, "city": city}
    )


def find_user_by_email(email):
    return db.session.execute(
        text("SELECT id, fullname, password_hash FROM users WHERE email = :email"),
        {"email": email}
    ).fetchone()


def get_user(user_id):
    return db.session.execute(
        text("SELECT id, fullname, email, phone, city FROM users WHERE id = :id"),
        {"id": user_id}
    ).fetchone()


# ---- Drivers --------------------------------------------------------------
def insert_driver(fullname, email, password_hash, phone, city, org_type,
                  organization_id=None, license_file=None):
    db.session.execute(
        text("""
            INSERT INTO drivers (fullname, email, password_hash, phone, city,
                                 org_type, organization_id, license_file)
            VALUES (:fullname, :email, :pw, :phone, :city, :org_type, :org_id, :license)
        """),
        {
            "fullname": fullname,
            "email": email,
            "pw": password_hash,
            "phone": phone,
            "city": city,
            "org_type": org_type,
            "org_id": organization_id,
            "license": license_file
        }
    )


def find_driver_by_email(email):
    return db.session.execute(
        text("SELECT id, fullname, password_hash FROM drivers WHERE email = :email"),
        {"email": email}
    ).fetchone()


def get_driver(driver_id):
    return db.session.execute(
        text("""
            SELECT id, fullname, email, phone, city, org_type, organization_id, license_file
            FROM drivers WHERE id = :id
        """),
        {"id": driver_id}
    ).fetchone()


def list_drivers():
    return db.session.execute(
        text("SELECT id, fullname, city FROM drivers ORDER BY id")
    ).fetchall()


def list_org_drivers(organization_id):
    return db.session.execute(
        text("""
            SELECT id, fullname, email, phone, city, org_type, license_file
            FROM drivers
            WHERE organization_id = :org_id
            ORDER BY fullname ASC
        """),
        {"org_id": organization_id}
    ).fetchall()


def pick_driver(city=None):
    """Return the id of the driver a new booking is assigned to, or None.

    Drivers in the rider's city come first; ties and the fallback go to the
    lowest id. There is no availability or capacity matching.
    """
    row = db.session.execute(
        text("""
            SELECT id FROM drivers
            ORDER BY CASE WHEN city = :city THEN 0 ELSE 1 END, id
            LIMIT 1
        """),
        {"city": city}
    ).fetchone()
    return row.id if row else None


def update_org_driver(driver_id, organization_id, fullname, email, phone, city):
    result = db.session.execute(
        text("""
            UPDATE drivers
            SET fullname = :fullname, email = :email, phone = :phone, city = :city
            WHERE id = :id AND organization_id = :org_id
        """),
        {
            "fullname": fullname,
            "email": email,
            "phone": phone,
            "city": city,
            "id": driver_id,
            "org_id": organization_id
        }
    )
    return result.rowcount


def delete_org_driver(driver_id, organization_id):
    # bookings keep their history but lose the reference
    db.session.execute(
        text("""
            UPDATE bookings SET driver_id = NULL
            WHERE driver_id IN (
                SELECT id FROM drivers WHERE id = :id AND organization_id = :org_id
            )
        """),
        {"id": driver_id, "org_id": organization_id}
    )
    result = db.session.execute(
        text("DELETE FROM drivers WHERE id = :id AND organization_id = :org_id"),
        {"id": driver_id, "org_id": organization_id}
    )
    return result.rowcount


# ---- Organizations --------------------------------------------------------
def insert_organization(company_name, reg_number, email, password_hash, phone):
    db.session.execute(
        text("""
            INSERT INTO organizations (company_name, reg_number, email, password_hash, phone)
            VALUES (:name, :reg, :email, :pw, :phone)
        """),
        {"name": company_name, "reg": reg_number, "email": email, "pw": password_hash, "phone": phone}
    )


def find_organization_by_email(email):
    return db.session.execute(
        text("SELECT id, company_name, password_hash FROM organizations WHERE email = :email"),
        {"email": email}
    ).fetchone()


def get_organization(organization_id):
    return db.session.execute(
        text("SELECT id, company_name, reg_number, email, phone FROM organizations WHERE id = :id"),
        {"id": organization_id}
    ).fetchone()


# ---- Bookings -------------------------------------------------------------
def insert_booking(user_id, driver_id, pickup_address, drop_address,
                   pickup_time, start_date, end_date):
    db.session.execute(
        text("""
            INSERT INTO bookings (user_id, driver_id, pickup_address, drop_address,
                                  pickup_time, start_date, end_date, status, confirmed)
            VALUES (:user_id, :driver_id, :pickup, :drop, :time, :start, :end, 'Scheduled', :confirmed)
        """),
        {
            "user_id": user_id,
            "driver_id": driver_id,
            "pickup": pickup_address,
            "drop": drop_address,
            "time": pickup_time,
            "start": start_date,
            "end": end_date,
            "confirmed": False
        }
    )


def user_bookings(user_id):
    return db.session.execute(
        text("""
            SELECT b.*, d.fullname AS driver_name
            FROM bookings b
            LEFT JOIN drivers d ON b.driver_id = d.id
            WHERE b.user_id = :user_id
            ORDER BY b.created_at DESC, b.id DESC
        """),
        {"user_id": user_id}
    ).fetchall()


def driver_rides(driver_id):
    return db.session.execute(
        text("""
            SELECT b.*, u.fullname AS user_name
            FROM bookings b
            LEFT JOIN users u ON b.user_id = u.id
            WHERE b.driver_id = :driver_id
            ORDER BY b.created_at DESC, b.id DESC
        """),
        {"driver_id": driver_id}
    ).fetchall()


def get_booking(booking_id):
    return db.session.execute(
        text("SELECT * FROM bookings WHERE id = :id"),
        {"id": booking_id}
    ).fetchone()


def confirm_booking(booking_id, driver_id):
    """Claim a booking for ``driver_id``. Cancelled bookings stay cancelled."""
    result = db.session.execute(
        text("""
            UPDATE bookings
            SET confirmed = :confirmed, status = 'Confirmed', driver_id = :driver_id
            WHERE id = :id AND status <> 'Cancelled'
        """),
        {"confirmed": True, "driver_id": driver_id, "id": booking_id}
    )
    return result.rowcount


def cancel_booking(booking_id, user_id):
    result = db.session.execute(
        text("""
            UPDATE bookings
            SET status = 'Cancelled', confirmed = :confirmed
            WHERE id = :id AND user_id = :user_id
        """),
        {"confirmed": False, "id": booking_id, "user_id": user_id}
    )
    return result.rowcount

import os
import secrets

from ptconnect import create_app
from ptconnect.extensions import db
from ptconnect.models import Profile

app = create_app(os.getenv('FLASK_CONFIG', 'default'))

with app.app_context():
    # First PT account
    email = os.getenv('PT_EMAIL', 'coach@example.com').strip().lower()
    name = os.getenv('PT_NAME', 'Head Coach')
    password = os.getenv('PT_PASSWORD') or secrets.token_urlsafe(12)

    existing = Profile.query.filter_by(email=email).first()
    if existing:
        print(f"Profile with email '{email}' already exists.")
    else:
        pt = Profile(role="pt", email=email)
        pt.set_name(name)
        pt.set_password(password)
        db.session.add(pt)
        db.session.commit()

        print(f"PT {pt.id} created successfully")
        print(f"Email: {email}")
        print(f"Password: {password}")

import pytest
from flask_jwt_extended import create_access_token

from ptconnect import create_app
from ptconnect.extensions import db
from ptconnect.models import Profile, PTClient


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def make_profile(role, name, email, password="Secret123!", goal=None):
    profile = Profile(role=role, email=email, training_frequency_goal=goal)
    profile.set_name(name)
    profile.set_password(password)
    db.session.add(profile)
    db.session.commit()
    return profile


@pytest.fixture
def pt(app):
    return make_profile("pt", "Pat Trainer", "pat@example.com")


@pytest.fixture
def trainee(app, pt):
    profile = make_profile("client", "Casey Client", "casey@example.com", goal=3)
    db.session.add(PTClient(pt_id=pt.id, client_id=profile.id, status="active"))
    db.session.commit()
    return profile


@pytest.fixture
def other_pt(app):
    return make_profile("pt", "Other Trainer", "other@example.com")


def auth_headers(profile):
    token = create_access_token(identity=str(profile.id), additional_claims={"role": profile.role})
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def pt_headers(pt):
    return auth_headers(pt)


@pytest.fixture
def other_pt_headers(other_pt):
    return auth_headers(other_pt)


@pytest.fixture
def client_headers(trainee):
    return auth_headers(trainee)


@pytest.fixture
def stranger(app):
    """A client with no PT assignment."""
    return make_profile("client", "Sam Stranger", "sam@example.com")

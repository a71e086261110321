from create_token import main, make_token
from pizza_api.app.services.session_service import (
    AdminIdentity,
    AdminSessionService,
    StaticIdentityProvider,
)


def _service(settings):
    identity = AdminIdentity(settings.admin_id, settings.admin_email, settings.admin_password)
    return AdminSessionService(
        StaticIdentityProvider(identity), secret_key=settings.secret_key, token_lifetime_seconds=60
    )


def test_make_token_is_accepted_by_session_service(settings):
    token = make_token(settings, days=2)
    identity = _service(settings).verify(token)
    assert identity.email == settings.admin_email


def test_main_prints_token(settings, capsys):
    assert main(["--days", "1"], settings=settings) == 0
    token = capsys.readouterr().out.strip()
    assert _service(settings).verify(token).id == settings.admin_id


def test_token_is_usable_against_the_api(client, settings):
    token = make_token(settings, days=1)
    resp = client.delete("/ingredients/unknown", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 404

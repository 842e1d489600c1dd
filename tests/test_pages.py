import pytest


def test_root_serves_login_when_anonymous(test_client):
    r = test_client.get("/", follow_redirects=False)
    assert r.status_code == 200
    assert "text/html" in r.headers["content-type"]


def test_root_redirects_to_dashboard_when_signed_in(user_client):
    r = user_client.get("/", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/dashboard.html"


def test_protected_page_redirects_to_login(test_client):
    r = test_client.get("/dashboard.html", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/login.html"


def test_protected_page_for_signed_in_user(user_client):
    r = user_client.get("/practice.html", follow_redirects=False)
    assert r.status_code == 200


def test_public_pages(test_client):
    for page in ("/login.html", "/signup.html", "/ai.html", "/problem.html"):
        r = test_client.get(page, follow_redirects=False)
        assert r.status_code == 200, page


def test_login_page_redirects_signed_in_user(user_client):
    r = user_client.get("/login.html", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/dashboard.html"


def test_admin_page_forbidden_for_user(user_client):
    r = user_client.get("/admin.html", follow_redirects=False)
    assert r.status_code == 403
    assert "Admin privileges required" in r.text


def test_admin_page_for_admin(admin_client):
    r = admin_client.get("/admin.html", follow_redirects=False)
    assert r.status_code == 200


def test_admin_page_anonymous_goes_to_login(test_client):
    r = test_client.get("/admin.html", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/login.html"


def test_directory_listing_disabled(test_client):
    r = test_client.get("/data/", follow_redirects=False)
    assert r.status_code == 403


def test_dotfiles_hidden(test_client):
    r = test_client.get("/.env", follow_redirects=False)
    assert r.status_code == 404


@pytest.mark.parametrize("url", [
    "http://testserver//admin.html",
    "http://testserver/%2Fadmin.html",
    "http://testserver///admin.html",
    "http://testserver/data/../admin.html",
])
def test_admin_page_variants_forbidden_for_user(user_client, url):
    r = user_client.get(url, follow_redirects=False)
    assert r.status_code == 403
    assert "Admin privileges required" in r.text


def test_admin_page_variants_anonymous_goes_to_login(test_client):
    r = test_client.get("http://testserver//admin.html", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/login.html"


def test_login_page_variant_redirects_signed_in_user(user_client):
    r = user_client.get("http://testserver//login.html", follow_redirects=False)
    assert r.status_code == 302
    assert r.headers["location"] == "/dashboard.html"


def test_pages_load_their_scripts(test_client, user_client):
    login_page = test_client.get("/login.html")
    assert 'id="login-form"' in login_page.text
    assert 'src="/auth.js"' in login_page.text

    practice = user_client.get("/practice.html")
    assert 'src="/practice.js"' in practice.text

    for script in ("/portal.js", "/auth.js", "/practice.js"):
        r = test_client.get(script)
        assert r.status_code == 200, script
        assert "javascript" in r.headers["content-type"]

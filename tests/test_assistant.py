import pytest

from app.services.assistant import FALLBACK, TOPICS, lookup, match_topic


@pytest.mark.parametrize("query,topic", [
    ("How do I get a learner licence?", "ll"),
    ("LL", "ll"),
    ("  What about   PUC certificate  ", "puc"),
    ("PUC renewal", "puc"),
    ("Insurance renewal", "insurance"),
    ("What is the fine for speeding?", "state penalties"),
    ("hypothecation", "hypothecation removal"),
    ("Need an IDP for travel", "international permit"),
    ("scrap my old bike", "scrappage"),
    ("No Objection certificate for moving", "noc"),
])
def test_match_topic(query, topic):
    assert match_topic(query) == topic


def test_first_matching_key_wins():
    # "rc" précède "rc transfer" dans l'ordre des fiches
    assert match_topic("rc transfer") == "rc"


def test_unknown_query_returns_fallback():
    assert match_topic("weather today") is None
    assert lookup("weather today") == FALLBACK
    assert lookup("") == FALLBACK


def test_lookup_returns_canned_record():
    rec = lookup("driving license test")
    assert rec is TOPICS["dl"]
    assert rec.fees and rec.steps and rec.documents


def test_lookup_is_pure():
    assert lookup("PUC") is lookup("puc")


def test_assistant_endpoint_requires_login(test_client):
    r = test_client.post("/api/assistant", json={"query": "puc"})
    assert r.status_code == 401


def test_assistant_endpoint_logs_query(user_client, admin_client):
    r = user_client.post("/api/assistant", json={"query": "How much is PUC?"})
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["data"]["summary"].startswith("Pollution Under Control")

    stats = admin_client.get("/api/admin/stats").json()["stats"]
    assert stats["aiQueries"] == 1


def test_assistant_empty_query_is_400(user_client):
    r = user_client.post("/api/assistant", json={"query": ""})
    assert r.status_code == 400

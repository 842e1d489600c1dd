def test_health(test_client):
    r = test_client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert "version" in data
    assert data["storage"] == "local"
    assert data["questions"] >= 20

def test_version(test_client):
    r = test_client.get("/version")
    assert r.status_code == 200
    data = r.json()
    assert "name" in data and "version" in data and "env" in data
    assert data["env"] == "test"

def test_question_source_is_served(test_client):
    r = test_client.get("/data/ll_questions.json")
    assert r.status_code == 200
    data = r.json()
    assert isinstance(data, list) and len(data) >= 20
    assert {"question", "options", "answerIndex", "explanation"} <= set(data[0])

import pytest
from fastapi.testclient import TestClient

from app.api.data import parse_csv
from app.api.model import calculate_model_stats
from app.core.dataset import Failed, Loading, Ready, get_dataset
from app.main import app

client = TestClient(app)


def use_dataset(state):
    app.dependency_overrides[get_dataset] = lambda: state


def ready_state(csv_text):
    passengers = parse_csv(csv_text)
    return Ready(passengers=tuple(passengers), stats=calculate_model_stats(passengers))


def test_index_while_loading():
    use_dataset(Loading())
    response = client.get("/")
    assert response.status_code == 200
    assert "Loading Titanic data..." in response.text
    assert "Model Accuracy" not in response.text


def test_index_after_failed_load():
    use_dataset(Failed(error="No such file"))
    response = client.get("/")
    assert response.status_code == 200
    assert "could not be loaded" in response.text
    assert "Make a Prediction" in response.text


def test_index_shows_stats(sample_csv):
    use_dataset(ready_state(sample_csv))
    response = client.get("/")
    assert response.status_code == 200
    assert "80.0%" in response.text
    assert "Enter passenger details" in response.text


def test_index_empty_dataset_accuracy_na():
    use_dataset(ready_state("PassengerId,Survived\n"))
    response = client.get("/")
    assert "n/a" in response.text


def test_index_prediction():
    use_dataset(Loading())
    response = client.get(
        "/",
        params={
            "pclass": "1", "sex": "female", "age": "10", "sibsp": "1",
            "parch": "1", "fare": "80", "embarked": "C", "predict_survival": "1"
        },
    )
    assert response.status_code == 200
    assert "SURVIVED" in response.text
    assert "100.0%" in response.text
    assert "Family of 3" in response.text


def test_index_prediction_with_bad_number():
    use_dataset(Loading())
    response = client.get("/", params={"age": "abc", "predict_survival": "1"})
    assert response.status_code == 200
    assert "DID NOT SURVIVE" in response.text
    assert "10.0%" in response.text


def test_data_status(sample_csv):
    use_dataset(ready_state(sample_csv))
    body = client.get("/api/data/status").json()
    assert body["status"] == "loaded"
    assert body["rows"] == 5
    assert "Embarked" in body["columns"]


def test_data_status_failed():
    use_dataset(Failed(error="No such file"))
    body = client.get("/api/data/status").json()
    assert body == {"status": "failed", "message": "No such file"}


def test_data_preview(sample_csv):
    use_dataset(ready_state(sample_csv))
    body = client.get("/api/data/preview", params={"limit": 2}).json()
    assert [row["Name"] for row in body["preview"]] == [
        "Braund, Mr. Owen Harris",
        "Cumings, Mrs. John Bradley (Florence Briggs Thayer)",
    ]


def test_data_preview_not_loaded():
    use_dataset(Failed(error="No such file"))
    assert client.get("/api/data/preview").status_code == 404


def test_data_stats(sample_csv):
    use_dataset(ready_state(sample_csv))
    stats = client.get("/api/data/stats").json()["statistics"]
    assert stats["Fare"]["count"] == 5
    assert stats["Age"]["count"] == 4


def test_model_stats(sample_csv):
    use_dataset(ready_state(sample_csv))
    body = client.get("/api/model/stats").json()
    assert body["accuracy"] == pytest.approx(80.0)
    assert body["total_passengers"] == 5
    assert body["survived_count"] == 2
    assert body["death_count"] == 3


def test_model_stats_unavailable():
    use_dataset(Loading())
    assert client.get("/api/model/stats").status_code == 503
    use_dataset(Failed(error="No such file"))
    assert client.get("/api/model/stats").status_code == 404


def test_model_rules():
    body = client.get("/api/model/rules").json()
    assert body["base_score"] == 0.5
    assert body["weights"]["female"] == 0.35
    assert body["defaults"] == {"age": 30, "fare": 15}


def test_predict_endpoint():
    response = client.post(
        "/api/predict/",
        json={"Pclass": 3, "Sex": "male", "Age": 30, "SibSp": 0, "Parch": 0, "Fare": 15, "Embarked": "S"},
    )
    assert response.status_code == 200
    body = response.json()
    assert body["survived"] is False
    assert abs(body["probability"] - 0.1) < 1e-9
    assert body["message"] == "Passenger did not survive"


def test_predict_validation_error():
    response = client.post("/api/predict/", json={"Sex": "male"})
    assert response.status_code == 422
    body = response.json()
    assert body["status"] == "error"
    assert "Pclass" in body["message"]


def test_batch_predict():
    response = client.post(
        "/api/predict/batch",
        json=[
            {"Pclass": 1, "Sex": "female", "Age": 10, "SibSp": 1, "Parch": 1, "Fare": 80},
            {"Pclass": 3, "Sex": "male"},
        ],
    )
    results = response.json()["results"]
    assert [r["passenger_index"] for r in results] == [0, 1]
    assert results[0]["survived"] is True
    assert results[1]["survived"] is False


def test_startup_loads_dataset(tmp_path, sample_csv, monkeypatch):
    path = tmp_path / "tested.csv"
    path.write_text(sample_csv, encoding="utf-8")
    monkeypatch.setattr("app.main.DATA_PATH", path)

    with TestClient(app) as started:
        body = started.get("/api/model/stats").json()

    assert body["total_passengers"] == 5


def test_startup_with_missing_dataset(tmp_path, monkeypatch):
    monkeypatch.setattr("app.main.DATA_PATH", tmp_path / "missing.csv")

    with TestClient(app) as started:
        assert started.get("/api/data/status").json()["status"] == "failed"
        assert "could not be loaded" in started.get("/").text


def test_index_prediction_with_oversized_number():
    use_dataset(Loading())
    response = client.get("/", params={"age": "1" * 5000, "predict_survival": "1"})
    assert response.status_code == 200
    assert "DID NOT SURVIVE" in response.text

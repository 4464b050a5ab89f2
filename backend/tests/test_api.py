from __future__ import annotations

from fastapi.testclient import TestClient

SCHEDULE = {"monThu": 8.5, "fri": 4, "satSun": 0}


def _record(record_type: str, start: str, end: str | None = None) -> dict:
    return {"startTime": start, "endTime": end, "type": record_type}


def test_healthz(client: TestClient) -> None:
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"status": "ok"}


def test_target_hours_endpoint(client: TestClient) -> None:
    resp = client.post("/target-hours", json={"day": "2026-01-06", "schedule": SCHEDULE})
    assert resp.status_code == 200
    data = resp.json()
    assert data["target_hours"] == 0
    assert data["is_holiday"] is True
    assert data["holiday_name"] == "Epifania"

    friday = client.post("/target-hours", json={"day": "2025-01-17", "schedule": SCHEDULE})
    assert friday.json()["target_hours"] == 4


def test_target_hours_rejects_garbage(client: TestClient) -> None:
    resp = client.post("/target-hours", json={"day": "not-a-date"})
    assert resp.status_code == 400


def test_ledger_endpoint(client: TestClient) -> None:
    payload = {
        "schedule": SCHEDULE,
        "balances": {"ord_2025": 39, "lic_937": 2, "rec_fest": 0, "com_log": 10, "rec_comp": 5},
        "records": [
            _record("work", "2025-01-13T08:00:00", "2025-01-13T17:30:00"),
            _record("work", "2025-08-15T08:00:00", "2025-08-15T12:00:00"),
            _record("rec_comp", "2025-01-14T09:00:00", "2025-01-14T09:00:00"),
            _record("ord_2025", "2025-01-15T09:00:00", "2025-01-15T17:30:00"),
            _record("com_log", "2025-01-16T08:00:00", "2025-01-16T10:00:00"),
        ],
    }
    resp = client.post("/ledger", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    # 5 opening + 1 + 4 - 8.5 + 0 + (2 - 8.5)
    assert data["hour_bank"] == -5.0
    assert data["used_leave"] == {"ord_2025": 1, "com_log": 2}
    assert data["earned"] == {"rec_fest": 1}
    assert data["remaining_leave"]["ord_2025"] == 38
    assert data["remaining_leave"]["rec_fest"] == 1
    assert data["remaining_leave"]["com_log"] == 8
    assert "rec_comp" not in data["remaining_leave"]


def test_ledger_rejects_unknown_category(client: TestClient) -> None:
    payload = {"records": [_record("sick", "2025-01-13T08:00:00", "2025-01-13T12:00:00")]}
    resp = client.post("/ledger", json=payload)
    assert resp.status_code == 422


def test_days_endpoint(client: TestClient) -> None:
    payload = {
        "schedule": SCHEDULE,
        "records": [
            _record("operation", "2025-01-13T08:00:00", "2025-01-13T17:00:00"),
            _record("work", "2025-01-13T08:00:00", "2025-01-13T18:00:00"),
        ],
    }
    resp = client.post("/days", json=payload)
    assert resp.status_code == 200
    rows = resp.json()
    assert len(rows) == 1
    assert rows[0]["day"] == "2025-01-13"
    assert rows[0]["kind"] == "neutral"
    assert rows[0]["balance_change"] == 0
    assert rows[0]["categories"] == ["operation", "work"]


def test_recent_days_endpoint(client: TestClient) -> None:
    payload = {
        "schedule": SCHEDULE,
        "today": "2025-01-19",
        "days": 3,
        "records": [_record("work", "2025-01-18T09:00:00", "2025-01-18T11:00:00")],
    }
    resp = client.post("/days/recent", json=payload)
    assert resp.status_code == 200
    rows = resp.json()
    assert [row["day"] for row in rows] == ["2025-01-17", "2025-01-18", "2025-01-19"]
    assert rows[0]["balance_change"] == -4
    assert rows[1]["worked_hours"] == 2


def test_create_entry(client: TestClient) -> None:
    resp = client.post(
        "/entries",
        json={"day": "2025-01-13", "category": "work", "start": "08:00", "end": "16:30", "note": "Ufficio"},
    )
    assert resp.status_code == 201
    data = resp.json()
    assert data["category"] == "work"
    assert data["note"] == "Ufficio"
    assert data["id"]

    bad = client.post("/entries", json={"day": "2025-01-13", "category": "work", "start": "16:30", "end": "08:00"})
    assert bad.status_code == 400

    unknown = client.post("/entries", json={"day": "2025-01-13", "category": "sick"})
    assert unknown.status_code == 400


def test_create_operation(client: TestClient) -> None:
    resp = client.post("/operations", json={"start_day": "2025-03-03", "end_day": "2025-03-05", "location": "Napoli"})
    assert resp.status_code == 201
    records = resp.json()
    assert len(records) == 3
    assert {record["category"] for record in records} == {"operation"}

    inverted = client.post("/operations", json={"start_day": "2025-03-05", "end_day": "2025-03-03", "location": "Napoli"})
    assert inverted.status_code == 400


def test_reconcile_balances_endpoint(client: TestClient) -> None:
    payload = {
        "today": "2026-02-01",
        "balances": {"ord_2025": 1, "ord_2027": 0, "lic_937": 3},
        "records": [_record("ord_2025", "2025-07-01T09:00:00", "2025-07-01T17:30:00")],
    }
    resp = client.post("/balances/reconcile", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    assert "ord_2025" not in data
    assert "ord_2027" not in data
    assert data["lic_937"] == 3
    assert "ord_2026" in data


def test_ledger_reports_presence_days(client: TestClient) -> None:
    payload = {
        "schedule": SCHEDULE,
        "balances": {"ord_2025": 39},
        "records": [
            _record("work", "2025-01-13T08:00:00", "2025-01-13T12:00:00"),
            _record("work", "2025-01-13T13:00:00", "2025-01-13T17:30:00"),
            _record("operation", "2025-01-14T08:00:00", "2025-01-14T17:00:00"),
            _record("ord_2025", "2025-01-15T09:00:00", "2025-01-15T17:30:00"),
        ],
    }
    resp = client.post("/ledger", json=payload)
    assert resp.status_code == 200
    assert resp.json()["presence_days"] == 2


def test_presence_endpoint(client: TestClient) -> None:
    payload = {
        "records": [
            _record("work", "2025-01-13T08:00:00", "2025-01-13T12:00:00"),
            _record("com_log", "2025-01-13T14:00:00", "2025-01-13T16:00:00"),
            _record("operation", "2025-03-03T08:00:00", "2025-03-03T17:00:00"),
            _record("lic_937", "2025-02-10T09:00:00", "2025-02-10T17:30:00"),
        ],
    }
    resp = client.post("/presence", json=payload)
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 2
    assert data["months"] == [
        {"year": 2025, "month": 1, "days": 1},
        {"year": 2025, "month": 2, "days": 0},
        {"year": 2025, "month": 3, "days": 1},
    ]


def test_ledger_default_balances_follow_today(client: TestClient) -> None:
    payload = {"records": [], "schedule": SCHEDULE, "today": "2024-05-01"}
    resp = client.post("/ledger", json=payload)
    assert resp.status_code == 200
    remaining = resp.json()["remaining_leave"]
    assert remaining["ord_2024"] == 39
    assert not any(tag.startswith("ord_") and tag != "ord_2024" for tag in remaining)

#!/usr/bin/env python3
"""
End-to-end tests for the HTTP API
"""

from datetime import datetime, timedelta, timezone

import pytest
from sqlalchemy.orm import Session

from fittrack.models.user import User
from conftest import USER_PAYLOAD


def log_workout(client, headers, **payload):
    response = client.post("/api/v1/workouts/", json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


def test_health(client):
    assert client.get("/health").json() == {"status": "healthy"}
    assert client.get("/health/db").json()["status"] == "healthy"


def test_register_returns_token_and_rank(registered):
    assert registered["token_type"] == "bearer"
    user = registered["user"]
    assert user["username"] == "hunter"
    assert user["email"] == "hunter@example.com"
    assert user["xp"] == 0
    assert user["streak"] == 0
    assert user["level"]["rank"] == "E"
    assert "hashed_password" not in user


def test_duplicate_registration_rejected(client, registered):
    response = client.post("/api/v1/auth/register", json=USER_PAYLOAD)
    assert response.status_code == 400


def test_login_with_username_or_email(client, registered):
    form = client.post("/api/v1/auth/login", data={"username": "hunter", "password": "secret123"})
    assert form.status_code == 200
    assert form.json()["access_token"]

    json_login = client.post("/api/v1/auth/login-json",
                             json={"username_or_email": "hunter@example.com", "password": "secret123"})
    assert json_login.status_code == 200


def test_login_wrong_password(client, registered):
    response = client.post("/api/v1/auth/login-json",
                           json={"username_or_email": "hunter", "password": "wrong-password"})
    assert response.status_code == 401


def test_protected_route_requires_token(client):
    response = client.get("/api/v1/users/me")
    assert response.status_code == 401
    assert "No token provided" in response.json()["detail"]

    response = client.get("/api/v1/users/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401
    assert response.json()["detail"] == "Not authorized. Token is invalid."


def test_change_password(client, auth_headers):
    response = client.post("/api/v1/auth/change-password", headers=auth_headers,
                           json={"current_password": "secret123", "new_password": "n3w-secret"})
    assert response.status_code == 200
    login = client.post("/api/v1/auth/login-json",
                        json={"username_or_email": "hunter", "password": "n3w-secret"})
    assert login.status_code == 200

    wrong = client.post("/api/v1/auth/change-password", headers=auth_headers,
                        json={"current_password": "secret123", "new_password": "another1"})
    assert wrong.status_code == 400


def test_workout_types(client):
    types = {t["key"]: t for t in client.get("/api/v1/workouts/types").json()}
    assert types["running"]["input_mode"] == "duration"
    assert types["running"]["calories_per_30_min"] == 300
    assert types["pushups"]["input_mode"] == "count"


def test_estimate_does_not_persist(client, auth_headers):
    response = client.post("/api/v1/workouts/estimate", headers=auth_headers,
                           json={"workout_type": "Running", "duration_minutes": 45, "intensity": "high"})
    assert response.status_code == 200
    assert response.json() == {"workout_type": "running", "input_mode": "duration", "calories": 540, "xp": 270}
    assert client.get("/api/v1/workouts/", headers=auth_headers).json() == []


def test_estimate_errors(client, auth_headers):
    unknown = client.post("/api/v1/workouts/estimate", headers=auth_headers,
                          json={"workout_type": "underwater_chess", "duration_minutes": 30})
    assert unknown.status_code == 400
    assert unknown.json()["detail"] == "Unknown Activity: underwater_chess"

    missing = client.post("/api/v1/workouts/estimate", headers=auth_headers,
                          json={"workout_type": "pushups"})
    assert missing.status_code == 400
    assert missing.json()["detail"].startswith("Invalid Input")


def test_logging_workouts_credits_xp_and_streak(client, auth_headers):
    first = log_workout(client, auth_headers, workout_type="running", duration_minutes=45, intensity="high")
    assert first["workout"]["calories_burned"] == 540
    assert first["workout"]["xp_earned"] == 270
    assert first["user"] == {
        "xp": 270,
        "streak": 1,
        "level": first["user"]["level"],
    }
    assert first["user"]["level"]["rank"] == "E"

    second = log_workout(client, auth_headers, workout_type="pushups", reps=20, sets=3)
    assert second["workout"]["calories_burned"] == 19
    assert second["workout"]["xp_earned"] == 10
    assert second["workout"]["sets"] == 3
    # Same day: streak unchanged, XP accumulates
    assert second["user"]["xp"] == 280
    assert second["user"]["streak"] == 1

    me = client.get("/api/v1/users/me", headers=auth_headers).json()
    assert me["xp"] == 280
    assert me["level"]["next_rank"] == "D"
    assert me["level"]["xp_to_next"] == 720


def test_consecutive_days_build_streak(client, auth_headers):
    now = datetime.now(timezone.utc)
    for days_ago in (2, 1):
        log_workout(client, auth_headers, workout_type="walking", duration_minutes=30,
                    logged_at=(now - timedelta(days=days_ago)).isoformat())
    result = log_workout(client, auth_headers, workout_type="walking", duration_minutes=30)
    assert result["user"]["streak"] == 3

    # A backdated entry does not change the streak
    result = log_workout(client, auth_headers, workout_type="yoga", duration_minutes=20,
                         logged_at=(now - timedelta(days=5)).isoformat())
    assert result["user"]["streak"] == 3


def test_rank_up_crosses_threshold(client, auth_headers):
    # 600 minutes of HIIT at high intensity: 350 * 20 * 1.2 = 8400 kcal, 4200 XP
    result = log_workout(client, auth_headers, workout_type="hiit", duration_minutes=600, intensity="high")
    assert result["user"]["xp"] == 4200
    assert result["user"]["level"]["rank"] == "C"


def test_future_workout_rejected(client, auth_headers):
    future = (datetime.now(timezone.utc) + timedelta(days=2)).isoformat()
    response = client.post("/api/v1/workouts/", headers=auth_headers,
                           json={"workout_type": "running", "duration_minutes": 30, "logged_at": future})
    assert response.status_code == 422


def test_stale_streak_resets_on_read(client, auth_headers, db_session):
    log_workout(client, auth_headers, workout_type="running", duration_minutes=30)
    user = db_session.query(User).filter(User.username == "hunter").one()
    user.streak = 6
    user.last_workout_date = user.last_workout_date - timedelta(days=3)
    db_session.commit()

    me = client.get("/api/v1/auth/me", headers=auth_headers).json()
    assert me["streak"] == 0

    # Logging again starts a fresh streak at 1
    result = log_workout(client, auth_headers, workout_type="running", duration_minutes=30)
    assert result["user"]["streak"] == 1


def test_delete_workout_keeps_xp(client, auth_headers):
    created = log_workout(client, auth_headers, workout_type="cycling", duration_minutes=60)
    workout_id = created["workout"]["id"]

    assert client.get(f"/api/v1/workouts/{workout_id}", headers=auth_headers).status_code == 200
    response = client.delete(f"/api/v1/workouts/{workout_id}", headers=auth_headers)
    assert response.status_code == 200
    assert client.get(f"/api/v1/workouts/{workout_id}", headers=auth_headers).status_code == 404
    assert client.get("/api/v1/users/me", headers=auth_headers).json()["xp"] == 250


def test_workout_list_and_summary(client, auth_headers):
    log_workout(client, auth_headers, workout_type="running", duration_minutes=30)
    log_workout(client, auth_headers, workout_type="running", duration_minutes=15)
    log_workout(client, auth_headers, workout_type="squats", reps=30)

    workouts = client.get("/api/v1/workouts/", headers=auth_headers).json()
    assert len(workouts) == 3
    running = client.get("/api/v1/workouts/", params={"workout_type": "running"}, headers=auth_headers).json()
    assert len(running) == 2

    summary = client.get("/api/v1/workouts/summary", headers=auth_headers).json()
    assert summary["total_workouts"] == 3
    assert summary["total_calories"] == 300 + 150 + 10
    assert summary["total_duration_minutes"] == 45
    assert summary["breakdown"][0]["workout_type"] == "running"
    assert summary["breakdown"][0]["count"] == 2


def test_other_users_workouts_are_hidden(client, auth_headers):
    created = log_workout(client, auth_headers, workout_type="running", duration_minutes=30)
    other = client.post("/api/v1/auth/register", json={
        "username": "rival", "email": "rival@example.com", "password": "secret123",
    }).json()
    other_headers = {"Authorization": f"Bearer {other['access_token']}"}
    response = client.get(f"/api/v1/workouts/{created['workout']['id']}", headers=other_headers)
    assert response.status_code == 404


def test_meals_from_catalog_and_manual(client, auth_headers):
    egg = client.post("/api/v1/meals/", headers=auth_headers,
                      json={"food_key": "egg", "quantity": 2, "unit": "pieces", "meal_type": "breakfast"})
    assert egg.status_code == 201
    assert egg.json()["calories"] == 143
    assert egg.json()["name"] == "Egg, whole"

    curry = client.post("/api/v1/meals/", headers=auth_headers,
                        json={"name": "Homemade curry", "calories": 450, "protein": 20, "meal_type": "dinner"})
    assert curry.status_code == 201

    unknown = client.post("/api/v1/meals/", headers=auth_headers, json={"food_key": "dragonfruit_pizza"})
    assert unknown.status_code == 400

    today = client.get("/api/v1/meals/today", headers=auth_headers).json()
    assert len(today["meals"]) == 2
    assert today["summary"]["intake"] == 593
    assert today["summary"]["protein"] == 33.0
    assert today["calorie_goal"] == 2000
    assert today["remaining"] == 1407

    weekly = client.get("/api/v1/meals/weekly", headers=auth_headers).json()
    assert len(weekly["days"]) == 7
    assert weekly["total_intake"] == 593

    meal_id = curry.json()["id"]
    assert client.delete(f"/api/v1/meals/{meal_id}", headers=auth_headers).status_code == 200
    assert client.get(f"/api/v1/meals/{meal_id}", headers=auth_headers).status_code == 404


def test_food_lookup(client):
    foods = client.get("/api/v1/meals/common").json()["foods"]
    assert any(f["key"] == "banana" for f in foods)
    matches = client.get("/api/v1/meals/search", params={"q": "rice"}).json()["foods"]
    assert {f["key"] for f in matches} == {"white_rice", "brown_rice"}

    estimate = client.post("/api/v1/meals/estimate", json={"food_key": "oats", "quantity": 1, "unit": "serving"})
    assert estimate.json()["calories"] == 156
    assert client.post("/api/v1/meals/estimate", json={"food_key": "nope"}).status_code == 404


def test_stats_dashboard(client, auth_headers):
    log_workout(client, auth_headers, workout_type="running", duration_minutes=60)
    client.post("/api/v1/meals/", headers=auth_headers, json={"name": "Lunch", "calories": 800})

    stats = client.get("/api/v1/users/stats", headers=auth_headers).json()
    assert stats["today"]["burned"] == 600
    assert stats["today"]["intake"] == 800
    assert [d["day"] for d in stats["weekly"]["days"]] == ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]
    assert stats["weekly"]["totals"]["burned"] == 600
    assert stats["workout_breakdown"][0]["workout_type"] == "running"
    assert stats["insights"][0]["category"] == "daily_goal"
    assert stats["insights"][0]["severity"] == "success"
    assert stats["body"]["bmi"] == 22.9
    assert stats["user"]["level"]["rank"] == "E"


def test_stats_idle_user(client, auth_headers):
    stats = client.get("/api/v1/users/stats", headers=auth_headers).json()
    assert [(i["category"], i["severity"]) for i in stats["insights"]] == [("daily_goal", "warning")]
    assert all(d["burned"] == 0 for d in stats["weekly"]["days"])


def test_progress_endpoints(client, auth_headers):
    log_workout(client, auth_headers, workout_type="swimming", duration_minutes=30)

    history = client.get("/api/v1/progress/", params={"days": 14}, headers=auth_headers).json()
    assert len(history["days"]) == 14
    assert history["days"][-1]["burned"] == 280
    assert history["totals"]["workout_count"] == 1

    today = client.get("/api/v1/progress/today", headers=auth_headers).json()
    assert today["burned"] == 280

    weekly = client.get("/api/v1/progress/weekly", headers=auth_headers).json()
    assert len(weekly["days"]) == 7

    month = client.get("/api/v1/progress/summary", params={"period": "month"}, headers=auth_headers).json()
    assert month["active_days"] == 1
    assert (datetime.fromisoformat(month["end_date"]) - datetime.fromisoformat(month["start_date"])).days == 29
    bad = client.get("/api/v1/progress/summary", params={"period": "decade"}, headers=auth_headers)
    assert bad.status_code == 422


def test_weight_tracking(client, auth_headers):
    entry = client.put("/api/v1/progress/weight", json={"weight": 68.5}, headers=auth_headers)
    assert entry.status_code == 200
    # Same day overwrites the entry
    client.put("/api/v1/progress/weight", json={"weight": 68.0}, headers=auth_headers)

    history = client.get("/api/v1/progress/weight", headers=auth_headers).json()
    assert len(history["entries"]) == 1
    assert history["current_weight"] == 68.0
    assert client.get("/api/v1/users/me", headers=auth_headers).json()["weight"] == 68.0


def test_profile_update(client, auth_headers):
    response = client.put("/api/v1/users/me", headers=auth_headers,
                          json={"weight": 80, "goal_weight": 72, "daily_burn_goal": 600})
    assert response.status_code == 200
    body = response.json()
    assert body["weight"] == 80
    assert body["daily_burn_goal"] == 600

    stats = client.get("/api/v1/users/stats", headers=auth_headers).json()
    assert stats["body"]["direction"] == "lose"
    assert stats["body"]["weight_to_goal"] == 8


def test_leaderboard(client, auth_headers):
    log_workout(client, auth_headers, workout_type="running", duration_minutes=30)
    client.post("/api/v1/auth/register", json={
        "username": "rival", "email": "rival@example.com", "password": "secret123",
    })
    board = client.get("/api/v1/users/leaderboard", headers=auth_headers).json()
    assert [entry["username"] for entry in board] == ["hunter", "rival"]
    assert board[0]["position"] == 1
    assert board[0]["xp"] == 150
    assert board[0]["rank"] == "E"


def test_register_rate_limited(client):
    statuses = []
    for i in range(6):
        response = client.post("/api/v1/auth/register", json={
            "username": f"user{i}", "email": f"user{i}@example.com", "password": "secret123",
        })
        statuses.append(response.status_code)
    assert statuses[:5] == [201] * 5
    assert statuses[5] == 429


def test_profile_update_ignores_null_for_required_fields(client, auth_headers):
    client.put("/api/v1/users/me", headers=auth_headers, json={"goal_weight": 72})
    response = client.put("/api/v1/users/me", headers=auth_headers,
                          json={"height": None, "gender": None, "goal": None, "body_fat": None,
                                "goal_weight": None})
    assert response.status_code == 200
    body = response.json()
    assert body["height"] == 175
    assert body["gender"] == "male"
    assert body["goal"] == "maintenance"
    assert body["body_fat"] == 20
    assert body["goal_weight"] is None


def test_zero_burn_goal_rejected(client, auth_headers):
    response = client.put("/api/v1/users/me", headers=auth_headers, json={"daily_burn_goal": 0})
    assert response.status_code == 422
    stats = client.get("/api/v1/users/stats", headers=auth_headers).json()
    assert [(i["category"], i["severity"]) for i in stats["insights"]] == [("daily_goal", "warning")]


def test_failed_workout_commit_leaves_no_trace(client, auth_headers, monkeypatch):
    def failing_commit(self):
        raise RuntimeError("database went away")

    with monkeypatch.context() as patch:
        patch.setattr(Session, "commit", failing_commit)
        with pytest.raises(RuntimeError):
            client.post("/api/v1/workouts/", headers=auth_headers,
                        json={"workout_type": "running", "duration_minutes": 45, "intensity": "high"})

    assert client.get("/api/v1/workouts/", headers=auth_headers).json() == []
    me = client.get("/api/v1/users/me", headers=auth_headers).json()
    assert me["xp"] == 0
    assert me["streak"] == 0
    assert me["last_workout_date"] is None


def test_count_workout_stores_no_duration(client, auth_headers):
    result = log_workout(client, auth_headers, workout_type="pushups", reps=20, duration_minutes=30)
    assert result["workout"]["duration_minutes"] == 0
    summary = client.get("/api/v1/workouts/summary", headers=auth_headers).json()
    assert summary["total_duration_minutes"] == 0

"""Exercise routes — CRUD, filters, sorting and ownership.

Invariants:
    - Names are unique per user (409), not globally
    - Missing → 404, someone else's → 403, malformed id → 404
    - Exercises used by a workout cannot be deleted (409)
"""

import uuid

from gym_tracker.models import Exercise
from tests.api.helpers import create_exercise, log_workout


async def test_create_exercise(client, alice):
    res = await client.post(
        "/api/exercises",
        json={
            "name": "  Romanian Deadlift ",
            "muscle_group": "Legs",
            "equipment_type": "Barbell",
            "description": "Hinge, soft knees",
        },
        headers=alice["headers"],
    )
    assert res.status_code == 201
    data = res.json()["data"]
    assert data["name"] == "Romanian Deadlift"
    assert data["muscle_group"] == "Legs"
    assert data["equipment_type"] == "Barbell"
    assert data["category"] == "strength"
    assert data["user_id"] == alice["user"]["id"]
    assert data["created_at"] and data["updated_at"]


async def test_duplicate_name_is_conflict(client, alice):
    await create_exercise(client, alice["headers"], "Squat")
    res = await client.post(
        "/api/exercises",
        json={"name": "Squat", "muscle_group": "Legs", "equipment_type": "Barbell"},
        headers=alice["headers"],
    )
    assert res.status_code == 409
    assert res.json()["error"]["message"] == "An exercise with this name already exists"


async def test_same_name_allowed_for_different_users(client, alice, bob):
    await create_exercise(client, alice["headers"], "Squat")
    await create_exercise(client, bob["headers"], "Squat")


async def test_invalid_enum_is_validation_error(client, alice):
    res = await client.post(
        "/api/exercises",
        json={"name": "Toe Raise", "muscle_group": "Toes", "equipment_type": "Barbell"},
        headers=alice["headers"],
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_filters_and_sorting(client, alice):
    h = alice["headers"]
    await create_exercise(client, h, "Squat", "Legs", "Barbell")
    await create_exercise(client, h, "Bench Press", "Chest", "Barbell")
    await create_exercise(client, h, "Leg Press", "Legs", "Machine")

    res = await client.get("/api/exercises", headers=h)
    assert [e["name"] for e in res.json()["data"]] == ["Leg Press", "Bench Press", "Squat"]

    res = await client.get("/api/exercises?sort=name_asc", headers=h)
    assert [e["name"] for e in res.json()["data"]] == ["Bench Press", "Leg Press", "Squat"]

    res = await client.get("/api/exercises?muscle_group=Legs&sort=created_asc", headers=h)
    assert [e["name"] for e in res.json()["data"]] == ["Squat", "Leg Press"]

    res = await client.get(
        "/api/exercises", params={"equipment_type": "Machine"}, headers=h,
    )
    assert [e["name"] for e in res.json()["data"]] == ["Leg Press"]


async def test_list_rejects_unknown_sort(client, alice):
    res = await client.get("/api/exercises?sort=random", headers=alice["headers"])
    assert res.status_code == 400


async def test_list_only_returns_own_exercises(client, alice, bob):
    await create_exercise(client, alice["headers"], "Squat")
    res = await client.get("/api/exercises", headers=bob["headers"])
    assert res.json()["data"] == []


async def test_get_exercise_not_found_and_forbidden(client, alice, bob):
    exercise = await create_exercise(client, alice["headers"])

    ok = await client.get(f"/api/exercises/{exercise['id']}", headers=alice["headers"])
    assert ok.status_code == 200

    for path in (f"/api/exercises/{uuid.uuid4()}", "/api/exercises/not-a-uuid"):
        res = await client.get(path, headers=alice["headers"])
        assert res.status_code == 404
        assert res.json()["error"]["message"] == "Exercise not found"

    res = await client.get(f"/api/exercises/{exercise['id']}", headers=bob["headers"])
    assert res.status_code == 403


async def test_update_exercise(client, alice):
    exercise = await create_exercise(client, alice["headers"], "Bench Press")
    res = await client.put(
        f"/api/exercises/{exercise['id']}",
        json={"muscle_group": "Arms", "description": "Close grip"},
        headers=alice["headers"],
    )
    assert res.status_code == 200
    data = res.json()["data"]
    assert data["name"] == "Bench Press"
    assert data["muscle_group"] == "Arms"
    assert data["equipment_type"] == "Barbell"
    assert data["description"] == "Close grip"


async def test_update_rename_collision(client, alice):
    await create_exercise(client, alice["headers"], "Squat")
    bench = await create_exercise(client, alice["headers"], "Bench Press")
    res = await client.put(
        f"/api/exercises/{bench['id']}", json={"name": "Squat"}, headers=alice["headers"],
    )
    assert res.status_code == 409


async def test_update_someone_elses_exercise_is_forbidden(client, alice, bob):
    exercise = await create_exercise(client, alice["headers"])
    res = await client.put(
        f"/api/exercises/{exercise['id']}", json={"name": "Mine now"}, headers=bob["headers"],
    )
    assert res.status_code == 403
    assert res.json()["error"]["message"] == (
        "Forbidden: You do not have permission to update this exercise"
    )


async def test_delete_exercise(client, alice):
    exercise = await create_exercise(client, alice["headers"])
    res = await client.delete(f"/api/exercises/{exercise['id']}", headers=alice["headers"])
    assert res.status_code == 200
    assert res.json()["data"] == {"message": "Exercise deleted successfully"}

    res = await client.get(f"/api/exercises/{exercise['id']}", headers=alice["headers"])
    assert res.status_code == 404


async def test_delete_exercise_in_use_is_conflict(client, alice):
    exercise = await create_exercise(client, alice["headers"])
    await log_workout(
        client, alice["headers"], "2026-03-10T10:00:00Z",
        [{"exercise_id": exercise["id"], "set_number": 1, "weight_kg": 60, "reps": 8}],
    )
    res = await client.delete(f"/api/exercises/{exercise['id']}", headers=alice["headers"])
    assert res.status_code == 409
    assert res.json()["error"]["message"] == (
        "Cannot delete exercise that is being used in workouts or routines"
    )


async def test_delete_someone_elses_exercise_is_forbidden(client, alice, bob):
    exercise = await create_exercise(client, alice["headers"])
    res = await client.delete(f"/api/exercises/{exercise['id']}", headers=bob["headers"])
    assert res.status_code == 403


async def test_requires_authentication(client):
    res = await client.get("/api/exercises")
    assert res.status_code == 401


async def test_public_flag_does_not_open_someone_elses_exercise(
    client, alice, bob, test_session_factory,
):
    exercise = await create_exercise(client, alice["headers"])
    async with test_session_factory() as db:
        row = await db.get(Exercise, uuid.UUID(exercise["id"]))
        row.is_public = True
        await db.commit()

    res = await client.get(f"/api/exercises/{exercise['id']}", headers=bob["headers"])
    assert res.status_code == 403
    assert res.json()["error"]["message"] == (
        "Forbidden: You do not have permission to view this exercise"
    )

    res = await client.post(
        "/api/workouts",
        json={
            "workout_date": "2026-03-10T10:00:00Z",
            "sets": [{"exercise_id": exercise["id"], "set_number": 1, "weight_kg": 50, "reps": 5}],
        },
        headers=bob["headers"],
    )
    assert res.status_code == 403

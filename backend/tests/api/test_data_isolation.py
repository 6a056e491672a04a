"""Per-user isolation — one user's data never shows up in another user's reads."""

from tests.api.helpers import create_exercise, log_workout


async def test_users_only_see_their_own_data(client, alice, bob):
    exercise = await create_exercise(client, alice["headers"], "Squat", "Legs")
    workout = await log_workout(
        client, alice["headers"], "2026-03-10T10:00:00Z",
        [{"exercise_id": exercise["id"], "set_number": 1, "weight_kg": 100, "reps": 5}],
    )
    h = bob["headers"]

    assert (await client.get("/api/exercises", headers=h)).json()["data"] == []
    assert (await client.get("/api/workouts", headers=h)).json()["data"] == []
    assert (await client.get("/api/stats/prs", headers=h)).json()["data"] == []
    assert (await client.get("/api/stats/records", headers=h)).json()["data"] == []
    assert (await client.get("/api/stats/volume?period=all", headers=h)).json()["data"] == []

    summary = (await client.get("/api/stats/summary", headers=h)).json()["data"]
    assert summary["total_workouts"] == 0
    assert summary["total_exercises"] == 0

    res = await client.get(f"/api/workouts/{workout['id']}", headers=h)
    assert res.status_code == 403


async def test_profiles_are_separate(client, alice, bob):
    await client.put("/api/profile", json={"full_name": "Alice"}, headers=alice["headers"])
    res = await client.get("/api/profile", headers=bob["headers"])
    assert res.json()["data"]["email"] == "bob@example.com"
    assert res.json()["data"]["full_name"] is None

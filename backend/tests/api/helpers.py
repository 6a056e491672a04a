"""Route test helpers — drive the public API the way a client would."""

from httpx import AsyncClient

PASSWORD = "correct-horse-battery"


async def signup(client: AsyncClient, email: str, password: str = PASSWORD) -> dict:
    """Sign up through the API; returns the response data plus ready-to-use headers."""
    resp = await client.post(
        "/api/auth/signup", json={"email": email, "password": password},
    )
    assert resp.status_code == 201, resp.text
    data = resp.json()["data"]
    data["headers"] = {
        "Authorization": f"Bearer {data['session']['access_token']}",
    }
    return data


async def create_exercise(
    client: AsyncClient, headers: dict, name: str = "Bench Press",
    muscle_group: str = "Chest", equipment_type: str = "Barbell",
) -> dict:
    resp = await client.post(
        "/api/exercises",
        json={
            "name": name,
            "muscle_group": muscle_group,
            "equipment_type": equipment_type,
        },
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]


async def log_workout(
    client: AsyncClient, headers: dict, workout_date: str, sets: list[dict],
    **extra,
) -> dict:
    resp = await client.post(
        "/api/workouts",
        json={"workout_date": workout_date, "sets": sets, **extra},
        headers=headers,
    )
    assert resp.status_code == 201, resp.text
    return resp.json()["data"]

from __future__ import annotations

from tests.base import BackendTestBase, push_ups, sit_ups, squats


class WorkoutApiTests(BackendTestBase):
    def setUp(self):
        super().setUp()
        self.admin = self._admin_token()
        self.username, _, self.token = self._register()
        self.other, _, self.other_token = self._register()
        self.push = self._seed_exercise(push_ups()).id
        self.sit = self._seed_exercise(sit_ups()).id
        self.squat = self._seed_exercise(squats()).id

    def _new_workout(self, exercises=None, notes=None) -> dict:
        status, body = self._create_workout(self.token, self.username, exercises or [self.push, self.sit], notes)
        if status != 201:
            self._fail_with("201 from workout create", {"status": status, "body": body})
        return body["workout"]

    def test_create_and_get_detail(self):
        self._info("Checks create then detail read with expanded exercises in workout order.")
        workout = self._new_workout([self.sit, self.push], notes="test notes")
        self.assertEqual(workout["username"], self.username)
        self.assertEqual(workout["exercises"], [self.sit, self.push])
        self.assertEqual(workout["notes"], "test notes")
        self.assertIn("date", workout)

        status, body = self._request("GET", f"/users/{self.username}/workouts/{workout['id']}", token=self.token)
        self.assertEqual(status, 200, body)
        detail = body["workout"]
        self.assertEqual([e["id"] for e in detail["exercises"]], [self.sit, self.push])
        self.assertEqual(detail["exercises"][0]["name"], "Sit-ups")
        self.assertIsNone(detail["exercises"][0]["weight"])
        self._pass("detail lists exercises in order", status, received_payload=body)

    def test_create_rejections(self):
        s_unknown, b_unknown = self._create_workout(self.token, self.username, [self.push, 999])
        self.assertEqual(s_unknown, 400, b_unknown)
        self.assertIn("Exercise not found", b_unknown["error"]["message"])

        s_other, _ = self._create_workout(self.other_token, self.username, [self.push])
        self.assertEqual(s_other, 401)

        s_anon, _ = self._create_workout(None, self.username, [self.push])
        self.assertEqual(s_anon, 401)

        s_ghost, b_ghost = self._create_workout(self.admin, "ghost", [self.push])
        self.assertEqual(s_ghost, 404, b_ghost)
        self.assertEqual(b_ghost["error"]["message"], "No user: ghost")

        s_bad, _ = self._create_workout(self.token, self.username, ["not-a-number"])
        self.assertEqual(s_bad, 400)

    def test_list_user_workouts(self):
        first = self._new_workout([self.push])
        second = self._new_workout([self.squat], notes="later")
        self._create_workout(self.other_token, self.other, [self.sit])

        status, body = self._request("GET", f"/users/{self.username}/workouts", token=self.token)
        self.assertEqual(status, 200, body)
        self.assertEqual([w["id"] for w in body["workouts"]], [second["id"], first["id"]])

        s_admin, b_admin = self._request("GET", f"/users/{self.username}/workouts", token=self.admin)
        self.assertEqual(s_admin, 200)
        self.assertEqual(b_admin, body)

        s_other, _ = self._request("GET", f"/users/{self.username}/workouts", token=self.other_token)
        self.assertEqual(s_other, 401)

    def test_workout_scoped_to_owner(self):
        self._info("A workout id under another user's path reads as missing.")
        workout = self._new_workout()
        path = f"/users/{self.other}/workouts/{workout['id']}"

        s_get, b_get = self._request("GET", path, token=self.other_token)
        self.assertEqual(s_get, 404, b_get)
        self.assertEqual(b_get["error"]["message"], f"No workout: {workout['id']}")

        s_patch, _ = self._request("PATCH", path, payload={"exercises": [self.push]}, token=self.other_token)
        s_delete, _ = self._request("DELETE", path, token=self.other_token)
        self.assertEqual(s_patch, 404)
        self.assertEqual(s_delete, 404)

        s_own, _ = self._request("GET", f"/users/{self.username}/workouts/{workout['id']}", token=self.token)
        self.assertEqual(s_own, 200)

    def test_update_workout(self):
        workout = self._new_workout([self.push, self.sit], notes="old")
        path = f"/users/{self.username}/workouts/{workout['id']}"

        status, body = self._request("PATCH", path, payload={"exercises": [self.squat], "notes": "new"}, token=self.token)
        self.assertEqual(status, 200, body)
        self.assertEqual(body["workout"]["exercises"], [self.squat])
        self.assertEqual(body["workout"]["notes"], "new")

        _, detail = self._request("GET", path, token=self.token)
        self.assertEqual([e["id"] for e in detail["workout"]["exercises"]], [self.squat])

        s_missing_list, _ = self._request("PATCH", path, payload={"notes": "only notes"}, token=self.token)
        self.assertEqual(s_missing_list, 400)

        s_unknown, _ = self._request("PATCH", path, payload={"exercises": [999]}, token=self.token)
        self.assertEqual(s_unknown, 400)

    def test_update_exercise_details(self):
        workout = self._new_workout([self.push, self.sit])
        path = f"/users/{self.username}/workouts/{workout['id']}"

        status, body = self._request(
            "PATCH",
            f"{path}/exercises",
            payload={"exercises": [{"exerciseId": self.push, "weight": 25.5, "reps": 10, "sets": 3}]},
            token=self.token,
        )
        self.assertEqual(status, 200, body)
        self.assertEqual(body["workout"]["workoutId"], workout["id"])
        self.assertEqual(
            body["workout"]["exercises"],
            [{"exerciseId": self.push, "weight": 25.5, "reps": 10, "sets": 3}],
        )

        _, detail = self._request("GET", path, token=self.token)
        push = detail["workout"]["exercises"][0]
        self.assertEqual((push["weight"], push["reps"], push["sets"]), (25.5, 10, 3))
        self.assertIsNone(detail["workout"]["exercises"][1]["weight"])

    def test_update_exercise_details_rejections(self):
        workout = self._new_workout([self.push])
        path = f"/users/{self.username}/workouts/{workout['id']}/exercises"

        s_absent, b_absent = self._request(
            "PATCH",
            path,
            payload={"exercises": [{"exerciseId": self.squat, "reps": 5}]},
            token=self.token,
        )
        self.assertEqual(s_absent, 404, b_absent)
        self.assertEqual(b_absent["error"]["message"], f"No workout: {workout['id']} or exercise: {self.squat}")

        s_empty, _ = self._request("PATCH", path, payload={"exercises": []}, token=self.token)
        self.assertEqual(s_empty, 400)

        s_negative, _ = self._request(
            "PATCH",
            path,
            payload={"exercises": [{"exerciseId": self.push, "reps": -1}]},
            token=self.token,
        )
        self.assertEqual(s_negative, 400)

    def test_delete_workout(self):
        workout = self._new_workout()
        path = f"/users/{self.username}/workouts/{workout['id']}"

        status, body = self._request("DELETE", path, token=self.token)
        self.assertEqual(status, 200, body)
        self.assertEqual(body, {"deleted": workout["id"]})

        s_get, _ = self._request("GET", path, token=self.token)
        self.assertEqual(s_get, 404)

        _, listing = self._request("GET", f"/users/{self.username}/workouts", token=self.token)
        self.assertEqual(listing["workouts"], [])

    def test_admin_workouts_by_username(self):
        self._info("GET /workouts is admin only and takes the username from the body or query.")
        workout = self._new_workout()

        s_user, _ = self._request("GET", "/workouts", payload={"username": self.username}, token=self.token)
        self.assertEqual(s_user, 401)

        s_body, b_body = self._request("GET", "/workouts", payload={"username": self.username}, token=self.admin)
        self.assertEqual(s_body, 200, b_body)
        self.assertEqual([w["id"] for w in b_body["workouts"]], [workout["id"]])

        s_query, b_query = self._request("GET", f"/workouts?username={self.username}", token=self.admin)
        self.assertEqual(s_query, 200, b_query)
        self.assertEqual(b_query, b_body)

        s_none, b_none = self._request("GET", "/workouts", token=self.admin)
        self.assertEqual(s_none, 400, b_none)
        self.assertEqual(b_none["error"]["message"], "username is required")

        s_ghost, _ = self._request("GET", "/workouts", payload={"username": "ghost"}, token=self.admin)
        self.assertEqual(s_ghost, 404)

    def test_deleted_exercise_leaves_raw_id(self):
        workout = self._new_workout([self.push, self.sit])
        s_delete, _ = self._request("DELETE", f"/exercises/{self.sit}", token=self.admin)
        self.assertEqual(s_delete, 200)

        _, listing = self._request("GET", f"/users/{self.username}/workouts", token=self.token)
        self.assertEqual(listing["workouts"][0]["exercises"], [self.push, self.sit])

        _, detail = self._request("GET", f"/users/{self.username}/workouts/{workout['id']}", token=self.token)
        self.assertEqual([e["id"] for e in detail["workout"]["exercises"]], [self.push])

    def test_ids_beyond_integer_column_are_rejected(self):
        self._info("Ids too large for an INTEGER column fail validation instead of reaching the driver.")
        huge = 2**70
        s_create, b_create = self._create_workout(self.token, self.username, [self.push, huge])
        self.assertEqual(s_create, 400, b_create)
        self.assertTrue(any(m.startswith("exercises.1:") for m in b_create["error"]["message"]), b_create)

        s_zero, _ = self._create_workout(self.token, self.username, [0])
        self.assertEqual(s_zero, 400)

        workout = self._new_workout([self.push])
        path = f"/users/{self.username}/workouts/{workout['id']}"
        s_update, _ = self._request("PATCH", path, payload={"exercises": [huge]}, token=self.token)
        self.assertEqual(s_update, 400)

        s_detail, _ = self._request(
            "PATCH",
            f"{path}/exercises",
            payload={"exercises": [{"exerciseId": self.push, "reps": huge}]},
            token=self.token,
        )
        self.assertEqual(s_detail, 400)

        s_get, b_get = self._request("GET", f"/users/{self.username}/workouts/{huge}", token=self.token)
        self.assertEqual(s_get, 400, b_get)
        self.assertEqual(b_get["error"]["status"], 400)

        s_delete, _ = self._request("DELETE", f"/users/{self.username}/workouts/{huge}", token=self.token)
        self.assertEqual(s_delete, 400)

        _, listing = self._request("GET", f"/users/{self.username}/workouts", token=self.token)
        self.assertEqual([w["exercises"] for w in listing["workouts"]], [[self.push]])

from __future__ import annotations

from liftlog.repositories.users import USER_COLUMNS
from tests.base import BackendTestBase, push_ups


class UserApiTests(BackendTestBase):
    def setUp(self):
        super().setUp()
        self.admin = self._admin_token()
        self.username, _, self.token = self._register()
        self.other, _, self.other_token = self._register()

    def test_get_self_other_admin_anonymous(self):
        self._info("Checks the admin-or-same-user matrix on GET /users/{username}.")
        s_self, b_self = self._request("GET", f"/users/{self.username}", token=self.token)
        s_other, b_other = self._request("GET", f"/users/{self.username}", token=self.other_token)
        s_admin, _ = self._request("GET", f"/users/{self.username}", token=self.admin)
        s_anon, _ = self._request("GET", f"/users/{self.username}")

        self.assertEqual(s_self, 200, b_self)
        self.assertEqual(s_other, 401, b_other)
        self.assertEqual(s_admin, 200)
        self.assertEqual(s_anon, 401)

        user = b_self["user"]
        self.assertEqual(user["username"], self.username)
        self.assertEqual(user["firstName"], "QA")
        self.assertFalse(user["isAdmin"])
        self.assertNotIn("password", user)
        self.assertNotIn("workouts", user)
        self._pass(
            "self 200, other 401, admin 200, anonymous 401",
            {"self": s_self, "other": s_other, "admin": s_admin, "anon": s_anon},
            received_payload=b_self,
        )

    def test_get_includes_workouts_once_logged(self):
        exercise = self._seed_exercise(push_ups())
        status, _ = self._create_workout(self.token, self.username, [exercise.id], notes="first")
        self.assertEqual(status, 201)

        _, body = self._request("GET", f"/users/{self.username}", token=self.token)
        workouts = body["user"]["workouts"]
        self.assertEqual(len(workouts), 1)
        self.assertEqual(workouts[0]["exercises"], [exercise.id])
        self.assertEqual(workouts[0]["notes"], "first")

    def test_get_missing_user(self):
        status, body = self._request("GET", "/users/nobody", token=self.admin)
        self.assertEqual(status, 404, body)
        self.assertEqual(body["error"]["message"], "No user: nobody")

    def test_list_users_admin_only(self):
        s_user, _ = self._request("GET", "/users", token=self.token)
        self.assertEqual(s_user, 401)

        status, body = self._request("GET", "/users", token=self.admin)
        self.assertEqual(status, 200, body)
        names = [u["username"] for u in body["users"]]
        self.assertEqual(names, sorted(names))
        self.assertIn(self.username, names)
        self.assertIn("admin", names)

    def test_admin_creates_admin(self):
        payload = {
            "username": "coach",
            "password": "password1",
            "firstName": "Coach",
            "lastName": "Carter",
            "email": "coach@example.com",
            "isAdmin": True,
        }
        s_user, _ = self._request("POST", "/users", payload=payload, token=self.token)
        self.assertEqual(s_user, 401)

        status, body = self._request("POST", "/users", payload=payload, token=self.admin)
        self.assertEqual(status, 201, body)
        self.assertTrue(body["user"]["isAdmin"])

        s_login, b_login = self._request("POST", "/auth/login", payload={"username": "coach", "password": "password1"})
        self.assertEqual(s_login, 200, b_login)

    def test_patch_self(self):
        status, body = self._request(
            "PATCH",
            f"/users/{self.username}",
            payload={"firstName": "Renamed", "password": "newpassword"},
            token=self.token,
        )
        self.assertEqual(status, 200, body)
        self.assertEqual(body["user"]["firstName"], "Renamed")
        self.assertNotIn("password", body["user"])

        s_old, _ = self._request("POST", "/auth/login", payload={"username": self.username, "password": "password1"})
        s_new, _ = self._request("POST", "/auth/login", payload={"username": self.username, "password": "newpassword"})
        self.assertEqual(s_old, 401)
        self.assertEqual(s_new, 200)

    def test_patch_rejections(self):
        s_other, _ = self._request("PATCH", f"/users/{self.username}", payload={"firstName": "X"}, token=self.other_token)
        self.assertEqual(s_other, 401)

        s_empty, b_empty = self._request("PATCH", f"/users/{self.username}", payload={}, token=self.token)
        self.assertEqual(s_empty, 400, b_empty)
        self.assertEqual(b_empty["error"]["message"], "No data")

        s_admin_flag, _ = self._request("PATCH", f"/users/{self.username}", payload={"isAdmin": True}, token=self.token)
        self.assertEqual(s_admin_flag, 400)

        s_missing, _ = self._request("PATCH", "/users/nobody", payload={"firstName": "X"}, token=self.admin)
        self.assertEqual(s_missing, 404)

    def test_patch_cannot_change_admin_flag(self):
        self._info("isAdmin is not writable through PATCH, even for an admin caller.")
        for token in (self.token, self.admin):
            status, body = self._request(
                "PATCH",
                f"/users/{self.username}",
                payload={"firstName": "Promoted", "isAdmin": True},
                token=token,
            )
            self.assertEqual(status, 400, body)

        _, body = self._request("GET", f"/users/{self.username}", token=self.admin)
        self.assertFalse(body["user"]["isAdmin"])
        self.assertEqual(body["user"]["firstName"], "QA")
        self.assertNotIn("isAdmin", USER_COLUMNS)

    def test_delete_admin_only(self):
        s_self, _ = self._request("DELETE", f"/users/{self.username}", token=self.token)
        self.assertEqual(s_self, 401)

        status, body = self._request("DELETE", f"/users/{self.username}", token=self.admin)
        self.assertEqual(status, 200, body)
        self.assertEqual(body, {"deleted": self.username})

        s_again, _ = self._request("DELETE", f"/users/{self.username}", token=self.admin)
        self.assertEqual(s_again, 404)

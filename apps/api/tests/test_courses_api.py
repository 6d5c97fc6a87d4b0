"""Course API, validation and ownership tests."""

from __future__ import annotations

import unittest

from fastapi.testclient import TestClient

from course_api.main import create_app
from course_api.repositories.base import CourseRecord
from support import TEST_PASSWORD, SettingsEnvCase, basic_auth, signup_body

OWNERSHIP_ERROR = {"error": "The course you are attempting to modify is owned by a different user"}


class _CourseApiCase(SettingsEnvCase):
    def setUp(self) -> None:
        super().setUp()
        self.app = create_app()
        self.client = TestClient(self.app)
        self.store = self.app.state.store

        for email in ("test@user.com", "other@user.com"):
            created = self.client.post("/users", json=signup_body(email, first_name=email.split("@")[0]))
            self.assertEqual(created.status_code, 201)
        self.owner_headers = basic_auth("test@user.com", TEST_PASSWORD)
        self.other_headers = basic_auth("other@user.com", TEST_PASSWORD)

    def _create_course(self, headers: dict[str, str] | None = None, **overrides: object) -> str:
        body = {"title": "Test Course 4", "description": "Another dummy test course"}
        body.update(overrides)
        response = self.client.post("/courses", headers=headers or self.owner_headers, json=body)
        self.assertEqual(response.status_code, 201)
        return response.headers["location"]


class CourseReadApiTests(_CourseApiCase):
    def test_create_then_fetch_returns_course_with_owner(self) -> None:
        response = self.client.post(
            "/courses",
            headers=self.owner_headers,
            json={"title": "Test Course 4", "description": "Another dummy test course"},
        )

        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.content, b"")
        location = response.headers["location"]
        self.assertRegex(location, r"^/courses/\d+$")

        fetched = self.client.get(location, headers=self.owner_headers)
        self.assertEqual(fetched.status_code, 200)
        self.assertEqual(
            fetched.json(),
            {
                "id": int(location.rsplit("/", 1)[1]),
                "title": "Test Course 4",
                "description": "Another dummy test course",
                "estimatedTime": None,
                "materialsNeeded": None,
                "userId": 1,
                "owner": {
                    "id": 1,
                    "firstName": "test",
                    "lastName": "User",
                    "emailAddress": "test@user.com",
                },
            },
        )

    def test_list_returns_every_course_with_its_owner(self) -> None:
        self._create_course(title="Mine")
        self._create_course(self.other_headers, title="Theirs", estimatedTime="3 hours")

        response = self.client.get("/courses", headers=self.owner_headers)

        self.assertEqual(response.status_code, 200)
        courses = response.json()
        self.assertEqual([course["title"] for course in courses], ["Mine", "Theirs"])
        self.assertEqual([course["owner"]["emailAddress"] for course in courses], ["test@user.com", "other@user.com"])
        self.assertEqual(courses[1]["estimatedTime"], "3 hours")
        for course in courses:
            self.assertNotIn("password", course["owner"])

    def test_list_is_empty_without_courses(self) -> None:
        response = self.client.get("/courses", headers=self.owner_headers)

        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), [])

    def test_reads_require_authentication(self) -> None:
        location = self._create_course()

        for path in ("/courses", location):
            response = self.client.get(path)
            self.assertEqual(response.status_code, 401)
            self.assertEqual(response.json(), {"message": "Access Denied"})

    def test_missing_course_returns_404(self) -> None:
        response = self.client.get("/courses/999", headers=self.owner_headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Course not found"})

    def test_non_numeric_course_id_returns_404(self) -> None:
        response = self.client.get("/courses/abc", headers=self.owner_headers)

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Course not found"})

    def test_authentication_precedes_not_found(self) -> None:
        response = self.client.get("/courses/999")

        self.assertEqual(response.status_code, 401)


class CourseCreateApiTests(_CourseApiCase):
    def test_malformed_json_without_valid_credentials_is_rejected_as_unauthenticated(self) -> None:
        location = self._create_course()
        attempts = [
            ("POST", "/courses", {}),
            ("POST", "/courses", basic_auth("test@user.com", "wrong-password")),
            ("PUT", location, {}),
            ("PUT", location, basic_auth("test@user.com", "wrong-password")),
        ]
        for method, path, auth_headers in attempts:
            with self.subTest(method=method, auth=bool(auth_headers)):
                response = self.client.request(
                    method,
                    path,
                    content=b"{not json",
                    headers={"Content-Type": "application/json", **auth_headers},
                )

                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), {"message": "Access Denied"})

    def test_malformed_json_with_valid_credentials_is_a_validation_error(self) -> None:
        response = self.client.post(
            "/courses",
            content=b"{not json",
            headers={"Content-Type": "application/json", **self.owner_headers},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"errors": ["Request body is not valid JSON"]})
        self.assertEqual(self.store.tables[CourseRecord], {})

    def test_missing_title_and_description_are_reported(self) -> None:
        response = self.client.post("/courses", headers=self.owner_headers, json={"estimatedTime": "1 hour"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(
            response.json(),
            {"errors": ['Please provide a value for "title"', 'Please provide a value for "description"']},
        )
        self.assertEqual(self.store.tables[CourseRecord], {})

    def test_authentication_precedes_validation(self) -> None:
        response = self.client.post("/courses", json={})

        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.json(), {"message": "Access Denied"})

    def test_client_supplied_owner_is_ignored(self) -> None:
        location = self._create_course(userId=2)

        fetched = self.client.get(location, headers=self.owner_headers).json()

        self.assertEqual(fetched["userId"], 1)
        self.assertEqual(fetched["owner"]["emailAddress"], "test@user.com")

    def test_optional_fields_are_persisted(self) -> None:
        location = self._create_course(estimatedTime="12 hours", materialsNeeded="* Glue")

        fetched = self.client.get(location, headers=self.owner_headers).json()

        self.assertEqual(fetched["estimatedTime"], "12 hours")
        self.assertEqual(fetched["materialsNeeded"], "* Glue")


class CourseUpdateApiTests(_CourseApiCase):
    def test_owner_update_returns_204_and_keeps_omitted_fields(self) -> None:
        location = self._create_course(estimatedTime="2 hours", materialsNeeded="Paper")

        response = self.client.put(
            location,
            headers=self.owner_headers,
            json={"title": "Renamed", "description": "New description", "materialsNeeded": "Pens"},
        )

        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b"")
        fetched = self.client.get(location, headers=self.owner_headers).json()
        self.assertEqual(fetched["title"], "Renamed")
        self.assertEqual(fetched["description"], "New description")
        self.assertEqual(fetched["estimatedTime"], "2 hours")
        self.assertEqual(fetched["materialsNeeded"], "Pens")

    def test_update_cannot_reassign_owner(self) -> None:
        location = self._create_course()

        response = self.client.put(
            location,
            headers=self.owner_headers,
            json={"title": "T", "description": "D", "userId": 2},
        )

        self.assertEqual(response.status_code, 204)
        self.assertEqual(self.client.get(location, headers=self.owner_headers).json()["userId"], 1)

    def test_non_owner_update_is_forbidden_and_has_no_effect(self) -> None:
        location = self._create_course()
        before = self.client.get(location, headers=self.owner_headers).json()
        writes_before = self.store.write_count

        response = self.client.put(
            location,
            headers=self.other_headers,
            json={"title": "Hijacked", "description": "Hijacked"},
        )

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), OWNERSHIP_ERROR)
        self.assertEqual(self.store.write_count, writes_before)
        self.assertEqual(self.client.get(location, headers=self.owner_headers).json(), before)

    def test_update_validates_required_fields(self) -> None:
        location = self._create_course()

        response = self.client.put(location, headers=self.owner_headers, json={"title": "Only title"})

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"errors": ['Please provide a value for "description"']})

    def test_validation_precedes_ownership(self) -> None:
        location = self._create_course()

        response = self.client.put(location, headers=self.other_headers, json={})

        self.assertEqual(response.status_code, 400)

    def test_update_of_missing_course_returns_404(self) -> None:
        response = self.client.put(
            "/courses/999",
            headers=self.owner_headers,
            json={"title": "T", "description": "D"},
        )

        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.json(), {"message": "Course not found"})

    def test_update_requires_authentication(self) -> None:
        location = self._create_course()

        response = self.client.put(location, json={"title": "T", "description": "D"})

        self.assertEqual(response.status_code, 401)


class CourseDeleteApiTests(_CourseApiCase):
    def test_owner_delete_returns_204_then_404(self) -> None:
        location = self._create_course()

        response = self.client.delete(location, headers=self.owner_headers)

        self.assertEqual(response.status_code, 204)
        self.assertEqual(response.content, b"")
        self.assertEqual(self.client.get(location, headers=self.owner_headers).status_code, 404)

    def test_non_owner_delete_is_forbidden(self) -> None:
        location = self._create_course()

        response = self.client.delete(location, headers=self.other_headers)

        self.assertEqual(response.status_code, 403)
        self.assertEqual(response.json(), OWNERSHIP_ERROR)
        self.assertEqual(self.client.get(location, headers=self.owner_headers).status_code, 200)

    def test_put_and_delete_share_ownership_rule(self) -> None:
        location = self._create_course()

        put = self.client.put(location, headers=self.other_headers, json={"title": "T", "description": "D"})
        delete = self.client.delete(location, headers=self.other_headers)

        self.assertEqual((put.status_code, delete.status_code), (403, 403))
        self.assertEqual(put.json(), delete.json())

    def test_delete_of_missing_course_returns_404(self) -> None:
        response = self.client.delete("/courses/999", headers=self.owner_headers)

        self.assertEqual(response.status_code, 404)

    def test_delete_requires_authentication(self) -> None:
        location = self._create_course()

        response = self.client.delete(location)

        self.assertEqual(response.status_code, 401)
        self.assertEqual(self.client.get(location, headers=self.owner_headers).status_code, 200)


class CourseStorageFailureTests(_CourseApiCase):
    def test_storage_failure_on_list_returns_generic_500(self) -> None:
        self._create_course()
        self.store.fail_next("replica unavailable", operation="find_all")

        with self.assertLogs("course_api.errors", level="ERROR") as logs:
            response = self.client.get("/courses", headers=self.owner_headers)

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json(), {"message": "Internal server error"})
        self.assertIn("replica unavailable", "\n".join(logs.output))

    def test_storage_failure_on_update_and_delete_returns_500(self) -> None:
        location = self._create_course()

        for method, operation in (("PUT", "update"), ("DELETE", "destroy")):
            with self.subTest(method=method):
                self.store.fail_next(operation=operation)
                with self.assertLogs("course_api.errors", level="ERROR"):
                    response = self.client.request(
                        method,
                        location,
                        headers=self.owner_headers,
                        json={"title": "T", "description": "D"} if method == "PUT" else None,
                    )
                self.assertEqual(response.status_code, 500)

        self.assertEqual(self.client.get(location, headers=self.owner_headers).json()["title"], "Test Course 4")


if __name__ == "__main__":
    unittest.main()

"""Shared helpers for API tests."""

from __future__ import annotations

import base64
import os
import unittest

from course_api.core.config import get_settings

TEST_PASSWORD = "password"


def basic_auth(identifier: str, secret: str) -> dict[str, str]:
    token = base64.b64encode(f"{identifier}:{secret}".encode("utf-8")).decode("ascii")
    return {"Authorization": f"Basic {token}"}


def signup_body(email_address: str, *, first_name: str = "Test", last_name: str = "User") -> dict[str, str]:
    return {
        "firstName": first_name,
        "lastName": last_name,
        "emailAddress": email_address,
        "password": TEST_PASSWORD,
    }


class SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "COURSE_API_BCRYPT_ROUNDS",
        "COURSE_API_SEED_PATH",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["COURSE_API_BCRYPT_ROUNDS"] = "4"
        os.environ.pop("COURSE_API_SEED_PATH", None)
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()

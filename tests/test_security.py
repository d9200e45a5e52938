"""Unit tests for app.core.security: bcrypt hashing and verification."""

import unittest

from app.core.security import burn_verification_time, hash_password, verify_password

ROUNDS = 10


class TestHashPassword(unittest.TestCase):
    """hash_password produces salted bcrypt hashes, never the plain text."""

    def test_hash_is_not_plain_text(self) -> None:
        hashed = hash_password("Str0ng!Pass", rounds=ROUNDS)
        self.assertNotEqual(hashed, "Str0ng!Pass")
        self.assertTrue(hashed.startswith("$2"))

    def test_same_password_gets_different_salts(self) -> None:
        self.assertNotEqual(
            hash_password("Str0ng!Pass", rounds=ROUNDS),
            hash_password("Str0ng!Pass", rounds=ROUNDS),
        )

    def test_cost_factor_is_encoded(self) -> None:
        hashed = hash_password("Str0ng!Pass", rounds=ROUNDS)
        self.assertEqual(hashed.split("$")[2], "10")


class TestVerifyPassword(unittest.TestCase):
    """verify_password returns a bool and never raises for bad input."""

    @classmethod
    def setUpClass(cls) -> None:
        cls.hashed = hash_password("Str0ng!Pass", rounds=ROUNDS)

    def test_correct_password(self) -> None:
        self.assertTrue(verify_password("Str0ng!Pass", self.hashed))

    def test_wrong_password(self) -> None:
        self.assertFalse(verify_password("wrong", self.hashed))

    def test_plain_text_stored_value_is_rejected(self) -> None:
        self.assertFalse(verify_password("Str0ng!Pass", "Str0ng!Pass"))

    def test_empty_stored_value(self) -> None:
        self.assertFalse(verify_password("Str0ng!Pass", ""))

    def test_long_passwords_use_first_72_bytes(self) -> None:
        base = "A1!" + "x" * 69
        hashed = hash_password(base + "tail", rounds=ROUNDS)
        self.assertTrue(verify_password(base + "other-tail", hashed))

    def test_burn_verification_time_does_not_raise(self) -> None:
        burn_verification_time("anything")


if __name__ == "__main__":
    unittest.main()

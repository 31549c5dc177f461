"""Patient and doctor accounts with bcrypt-hashed passwords in a JSON file."""
import json
import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, Tuple
from uuid import uuid4

import bcrypt


logger = logging.getLogger(__name__)


ROLES = ("patient", "doctor")
PUBLIC_FIELDS = ("id", "firstname", "lastname", "email", "role")


class UserManager:
    """Registers, authenticates and looks up portal users.

    Users are keyed by lowercase email. Each user also gets a stable ``id``
    which the assessment store uses as its owner key.
    """

    def __init__(self, storage_path: Optional[str] = None):
        """
        Initialize UserManager.

        Args:
            storage_path: Path to JSON file for user storage.
                         Defaults to .streamlit/users.json
        """
        if storage_path is None:
            project_root = Path(__file__).parent.parent.parent.parent
            storage_path = str(project_root / ".streamlit" / "users.json")

        self.storage_path = storage_path
        self._ensure_storage_exists()

    def _ensure_storage_exists(self) -> None:
        storage_dir = os.path.dirname(self.storage_path)
        if storage_dir and not os.path.exists(storage_dir):
            os.makedirs(storage_dir, exist_ok=True)

        if not os.path.exists(self.storage_path) or os.path.getsize(self.storage_path) == 0:
            self._save_users({})

    def _load_users(self) -> Dict[str, Any]:
        try:
            with open(self.storage_path, 'r') as f:
                return json.load(f)
        except (FileNotFoundError, json.JSONDecodeError):
            logger.warning("User store %s missing or unreadable; treating as empty", self.storage_path)
            return {}

    def _save_users(self, users: Dict[str, Any]) -> None:
        with open(self.storage_path, 'w') as f:
            json.dump(users, f, indent=2)

    @staticmethod
    def _public(user: Dict[str, Any]) -> Dict[str, Any]:
        return {field: user.get(field) for field in PUBLIC_FIELDS}

    def _hash_password(self, password: str) -> str:
        """
        Salt and hash a password with bcrypt.

        Args:
            password: Plain text password

        Returns:
            bcrypt hash decoded to str for JSON storage
        """
        hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
        return hashed.decode('utf-8')

    def _verify_password(self, password: str, hashed_password: str) -> bool:
        """
        Verify password against hashed password.

        Returns:
            True if password matches, False otherwise (including a malformed hash)
        """
        try:
            return bcrypt.checkpw(password.encode('utf-8'), hashed_password.encode('utf-8'))
        except ValueError:
            logger.warning("Stored password hash is malformed")
            return False

    def email_exists(self, email: str) -> bool:
        """
        Check whether an account already uses this email.

        Args:
            email: Email to look up (case and surrounding whitespace ignored)

        Returns:
            True if registered, False otherwise
        """
        return email.strip().lower() in self._load_users()

    def register_user(
        self,
        firstname: str,
        lastname: str,
        email: str,
        password: str,
        role: str = "patient",
    ) -> Tuple[bool, str]:
        """
        Register a new patient or doctor.

        Returns:
            Tuple of (success, message)
        """
        email = email.strip().lower()
        role = role.strip().lower()

        if role not in ROLES:
            return False, f"Role must be one of: {', '.join(ROLES)}"

        if self.email_exists(email):
            return False, "Email already registered"

        users = self._load_users()
        users[email] = {
            "id": uuid4().hex,
            "firstname": firstname.strip(),
            "lastname": lastname.strip(),
            "email": email,
            "role": role,
            "password": self._hash_password(password),
            "created_at": datetime.now().isoformat(),
            "last_login": None,
        }

        try:
            self._save_users(users)
        except OSError as e:
            logger.exception("Failed to save user %s", email)
            return False, f"Failed to save user: {str(e)}"

        logger.info("Registered %s account for %s", role, email)
        return True, "Registration successful"

    def authenticate_user(self, email: str, password: str) -> Tuple[bool, Optional[Dict[str, Any]]]:
        """
        Authenticate user with email and password.

        Returns:
            Tuple of (success, user_data or None)
            user_data contains: id, firstname, lastname, email, role (without password)
        """
        email = email.strip().lower()
        users = self._load_users()

        user = users.get(email)
        if user is None or not self._verify_password(password, user["password"]):
            return False, None

        user["last_login"] = datetime.now().isoformat()
        self._save_users(users)

        return True, self._public(user)

    def get_user(self, email: str) -> Optional[Dict[str, Any]]:
        """
        Look up a user by email.

        Args:
            email: User's email address

        Returns:
            Public user fields (no password hash), or None if not registered
        """
        user = self._load_users().get(email.strip().lower())
        return self._public(user) if user else None

    def get_user_by_id(self, user_id: str) -> Optional[Dict[str, Any]]:
        """
        Look up a user by the id stored on their assessments.

        Returns:
            Public user fields, or None if no user has this id
        """
        for user in self._load_users().values():
            if user.get("id") == user_id:
                return self._public(user)
        return None

"""Login and registration screens."""
import time

import streamlit as st

from grahmeen_health.infrastructure.auth.user_manager import UserManager
from grahmeen_health.infrastructure.auth.validators import (
    passwords_match,
    validate_email,
    validate_name,
    validate_password,
    validate_role,
)
from grahmeen_health.infrastructure.config import Settings


SESSION_KEYS = ("early_detection_result", "history_filter", "medication_screening", "hospitals")


def _user_manager() -> UserManager:
    return UserManager(storage_path=Settings().users_path)


def show_login_screen() -> bool:
    """
    Display login screen.

    Returns:
        True if user successfully logged in, False otherwise
    """
    st.markdown("# 🔐 Login")
    st.markdown("Sign in to GrahmeenHealth to run an early-detection check.")

    with st.form("login_form"):
        email = st.text_input("Email", placeholder="your.email@example.com")
        password = st.text_input("Password", type="password", placeholder="Enter your password")

        col1, col2 = st.columns([1, 1])
        with col1:
            submit = st.form_submit_button("Login", use_container_width=True)
        with col2:
            register_btn = st.form_submit_button("Need an account? Register", use_container_width=True)

        if register_btn:
            st.session_state.auth_mode = "register"
            st.rerun()

        if submit:
            if not email or not password:
                st.error("❌ Please enter both email and password")
                return False

            email_valid, email_error = validate_email(email)
            if not email_valid:
                st.error(f"❌ {email_error}")
                return False

            success, user_data = _user_manager().authenticate_user(email, password)
            if success:
                st.session_state.authenticated = True
                st.session_state.user_data = user_data
                st.success(f"✅ Welcome back, {user_data['firstname']}!")
                st.rerun()
                return True

            st.error("❌ Invalid email or password")
            return False

    return False


def show_register_screen() -> bool:
    """
    Display registration screen.

    Returns:
        True if user successfully registered, False otherwise
    """
    st.markdown("# ✍️ Register")
    st.markdown("Create a patient or doctor account.")

    with st.form("register_form"):
        role = st.radio("I am a", ["patient", "doctor"], horizontal=True)
        firstname = st.text_input("First Name", placeholder="Asha")
        lastname = st.text_input("Last Name", placeholder="Rahman")
        email = st.text_input("Email", placeholder="your.email@example.com")
        password = st.text_input("Password", type="password", placeholder="Enter a strong password")
        confirm_password = st.text_input("Confirm Password", type="password", placeholder="Re-enter your password")

        st.caption("Password must be at least 8 characters and include uppercase, lowercase, number, and special character.")

        col1, col2 = st.columns([1, 1])
        with col1:
            submit = st.form_submit_button("Register", use_container_width=True)
        with col2:
            login_btn = st.form_submit_button("Already have an account? Login", use_container_width=True)

        if login_btn:
            st.session_state.auth_mode = "login"
            st.rerun()

        if submit:
            errors = collect_registration_errors(role, firstname, lastname, email, password, confirm_password)
            if errors:
                for error in errors:
                    st.error(f"❌ {error}")
                return False

            success, message = _user_manager().register_user(
                firstname=firstname,
                lastname=lastname,
                email=email,
                password=password,
                role=role,
            )

            if success:
                st.success(f"✅ {message}! Please login to continue.")
                st.info("Redirecting to login page in 2 seconds...")
                st.session_state.auth_mode = "login"
                time.sleep(2)
                st.rerun()
                return True

            st.error(f"❌ {message}")
            return False

    return False


def collect_registration_errors(role, firstname, lastname, email, password, confirm_password) -> list:
    errors = []
    checks = [
        validate_role(role),
        validate_name(firstname, "First name"),
        validate_name(lastname, "Last name"),
        validate_email(email),
    ]
    password_check = validate_password(password)
    checks.append(password_check)
    # Mismatch only matters once the password itself is acceptable
    if password_check[0]:
        checks.append(passwords_match(password, confirm_password))

    for valid, error in checks:
        if not valid:
            errors.append(error)
    return errors


def show_auth_screen() -> bool:
    """
    Display the login or register screen depending on session state.

    Returns:
        True if user is authenticated, False otherwise
    """
    if "auth_mode" not in st.session_state:
        st.session_state.auth_mode = "login"

    if st.session_state.get("authenticated", False):
        return True

    if st.session_state.auth_mode == "register":
        return show_register_screen()
    return show_login_screen()


def logout():
    st.session_state.authenticated = False
    st.session_state.user_data = None
    st.session_state.auth_mode = "login"
    for key in SESSION_KEYS:
        if key in st.session_state:
            del st.session_state[key]
    st.rerun()

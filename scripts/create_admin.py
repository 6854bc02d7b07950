#!/usr/bin/env python3
"""
Create the first admin account, or promote an existing account to admin.

Reads ADMIN_EMAIL and ADMIN_PASSWORD from the environment. Safe to run more
than once: an existing account keeps its password.

Usage:
    ADMIN_EMAIL=admin@motoin.it ADMIN_PASSWORD=... python scripts/create_admin.py
"""

from __future__ import annotations

import sys
from dataclasses import replace

from motoin.adapters.bcrypt_password_hasher import BcryptPasswordHasher
from motoin.adapters.postgres_user_repository import PostgresUserRepository
from motoin.domain.users import Role, normalize_email
from motoin.infra.config import admin_credentials
from motoin.infra.db.session import get_session
from motoin.use_cases.manage_users import CreateUser, CreateUserRequest


def create_admin() -> None:
    email, password = admin_credentials()

    with get_session() as session:
        users = PostgresUserRepository(session=session)

        existing = users.get_by_email(normalize_email(email))
        if existing is not None:
            print(f"ℹ️  Account already exists: {existing.email}")
            if existing.role is not Role.ADMIN:
                users.save(replace(existing, role=Role.ADMIN))
                print("   Promoted to admin")
            return

        use_case = CreateUser(user_repository=users, password_hasher=BcryptPasswordHasher())
        admin = use_case.execute(
            CreateUserRequest(
                email=email,
                password=password,
                fields={"first_name": "Admin", "last_name": "MotoIn", "role": Role.ADMIN},
            )
        )

    print(f"✅ Admin created: {admin.email}")
    print("   Change the password after the first login.")


if __name__ == "__main__":
    try:
        create_admin()
    except Exception as e:
        print(f"❌ Error creating admin: {e}", file=sys.stderr)
        sys.exit(1)

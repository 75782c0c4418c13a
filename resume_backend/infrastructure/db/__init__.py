# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .models import AuditLog, SessionToken, User
from .session import Base, Database

__all__ = ["AuditLog", "Base", "Database", "SessionToken", "User"]

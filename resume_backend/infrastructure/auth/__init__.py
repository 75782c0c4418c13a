# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .request_authorizer import RequestAuthorizer

__all__ = ["RequestAuthorizer"]

# -*- coding: utf-8 -*-
# SPDX-License-Identifier: Apache-2.0

"""
Cross-origin access for the rescue frontend.

The frontend is normally served from the same deployment; configured origins
cover local development and separately hosted frontends such as Vercel
preview builds. Origin patterns are shell-style wildcards, so
'https://*.vercel.app' matches every preview deployment.
"""

from fnmatch import fnmatchcase
from flask import Flask, request, make_response
from typing import Iterable, List, Optional
import logging

logger = logging.getLogger(__name__)

DEVELOPMENT_ORIGINS = [
    'http://localhost:3000',
    'http://localhost:5173',  # Vite default
    'http://127.0.0.1:3000',
    'http://127.0.0.1:5173'
]

API_METHODS = ('GET', 'POST', 'OPTIONS')
API_HEADERS = ('Accept', 'Content-Type', 'X-Requested-With', 'X-Trace-Id')
PREFLIGHT_MAX_AGE = 86400


def origin_matches(pattern: str, origin: str) -> bool:
    return pattern == origin or fnmatchcase(origin, pattern)


class CORSMiddleware:
    """Answers preflight requests and tags responses for allowed origins."""

    def __init__(self, app: Flask, allowed_origins: Optional[Iterable[str]] = None):
        self.app = app
        self.allowed_origins = list(allowed_origins or [])
        self.cors_headers = {
            'Access-Control-Allow-Methods': ', '.join(API_METHODS),
            'Access-Control-Allow-Headers': ', '.join(API_HEADERS),
            'Access-Control-Max-Age': str(PREFLIGHT_MAX_AGE),
            'Vary': 'Origin'
        }

        app.before_request(self.answer_preflight)
        app.after_request(self.tag_response)

    def is_origin_allowed(self, origin: Optional[str]) -> bool:
        if not origin:
            return False
        return any(origin_matches(pattern, origin) for pattern in self.allowed_origins)

    def apply_headers(self, response, origin: str):
        response.headers['Access-Control-Allow-Origin'] = origin
        response.headers.update(self.cors_headers)
        return response

    def answer_preflight(self):
        """Short-circuit OPTIONS requests: 204 for allowed origins, 403 otherwise."""
        if request.method != 'OPTIONS':
            return None

        origin = request.headers.get('Origin')
        if not self.is_origin_allowed(origin):
            logger.warning(
                "CORS preflight rejected",
                extra={"extra_fields": {"origin": origin, "path": request.path}}
            )
            return make_response('', 403)

        return self.apply_headers(make_response('', 204), origin)

    def tag_response(self, response):
        origin = request.headers.get('Origin')
        if request.method != 'OPTIONS' and self.is_origin_allowed(origin):
            self.apply_headers(response, origin)
        return response


def configure_cors(app: Flask, allowed_origins: List[str], environment: str = 'development') -> CORSMiddleware:
    """
    Install CORS handling on the app.

    Local dev server origins are added in the development environment only.
    """
    origins = list(allowed_origins)
    if environment == 'development':
        origins.extend(DEVELOPMENT_ORIGINS)
    return CORSMiddleware(app, allowed_origins=origins)

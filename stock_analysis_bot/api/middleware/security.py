from starlette.middleware.base import BaseHTTPMiddleware

DEFAULT_HEADERS = {
    "X-Frame-Options": "DENY",
    "X-Content-Type-Options": "nosniff",
    "Referrer-Policy": "no-referrer",
}

# stats and webhook answers must never be served from a cache
NO_STORE_PREFIXES = ("/admin", "/webhook")


class SecurityHeaders(BaseHTTPMiddleware):
    async def dispatch(self, request, call_next):
        resp = await call_next(request)
        for name, value in DEFAULT_HEADERS.items():
            resp.headers.setdefault(name, value)
        if request.url.path.startswith(NO_STORE_PREFIXES):
            resp.headers["Cache-Control"] = "no-store"
        return resp

"""
Cookie mutations.

Resolvers never touch a response. They return CookieMutation values and the
route handler applies them with apply_cookie_mutations().
"""

from dataclasses import dataclass
from typing import Iterable, Literal, Optional

from starlette.responses import Response


@dataclass(frozen=True)
class CookieMutation:
    """A cookie to set (value is not None) or clear (value is None)."""
    name: str
    value: Optional[str]
    max_age: Optional[int] = None
    path: str = "/"
    httponly: bool = True
    samesite: Literal["lax", "strict", "none"] = "lax"
    secure: bool = False

    @property
    def is_delete(self) -> bool:
        return self.value is None


def set_cookie(
    name: str,
    value: str,
    max_age: Optional[int],
    secure: bool = False,
    path: str = "/",
) -> CookieMutation:
    """HTTP-only, SameSite=Lax cookie scoped to path."""
    return CookieMutation(name=name, value=value, max_age=max_age, path=path, secure=secure)


def delete_cookie(name: str, secure: bool = False, path: str = "/") -> CookieMutation:
    return CookieMutation(name=name, value=None, path=path, secure=secure)


def apply_cookie_mutations(response: Response, mutations: Iterable[CookieMutation]) -> Response:
    """Write mutations onto a Starlette/FastAPI response, in order."""
    for mutation in mutations:
        if mutation.is_delete:
            response.delete_cookie(
                key=mutation.name,
                path=mutation.path,
                secure=mutation.secure,
                httponly=mutation.httponly,
                samesite=mutation.samesite,
            )
        else:
            response.set_cookie(
                key=mutation.name,
                value=mutation.value,
                max_age=mutation.max_age,
                path=mutation.path,
                secure=mutation.secure,
                httponly=mutation.httponly,
                samesite=mutation.samesite,
            )
    return response

"""
Admin session state.

A session is in exactly one of three states, modelled as a discriminated
union so that "pending and authenticated at once" cannot be represented:

* ``Anonymous``      - nobody signed in (may remember where to go after login)
* ``OtpPending``     - password accepted, waiting for the one-time code
* ``Authenticated``  - signed-in admin
"""

from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter, ValidationError

from storefront.security.otp import OtpChallenge


class AdminIdentityRef(BaseModel):
    """The slice of an admin identity kept in the session."""

    id: int
    email: str


class Anonymous(BaseModel):
    kind: Literal["anonymous"] = "anonymous"
    return_to: Optional[str] = None


class OtpPending(BaseModel):
    kind: Literal["otp_pending"] = "otp_pending"
    pending_admin: AdminIdentityRef
    challenge: OtpChallenge
    return_to: Optional[str] = None


class Authenticated(BaseModel):
    kind: Literal["authenticated"] = "authenticated"
    admin: AdminIdentityRef


SessionState = Annotated[Union[Anonymous, OtpPending, Authenticated], Field(discriminator="kind")]

_state_adapter = TypeAdapter(SessionState)


def load_state(raw: Optional[dict]) -> Union[Anonymous, OtpPending, Authenticated]:
    """Parse a stored state, treating empty or unrecognised data as anonymous."""
    if not raw:
        return Anonymous()
    try:
        return _state_adapter.validate_python(raw)
    except ValidationError:
        return Anonymous()


def dump_state(state: Union[Anonymous, OtpPending, Authenticated]) -> dict:
    return state.model_dump(mode="json")


class AuthSession:
    """
    Mutable handle on one session: its id plus the current state.

    Transitions replace ``state`` wholesale; the session store persists it at
    the end of the request.
    """

    def __init__(self, sid: str, state: Union[Anonymous, OtpPending, Authenticated] = None):
        self.sid = sid
        self.state = state or Anonymous()
        self.destroyed = False

    # Queries

    @property
    def kind(self) -> str:
        return self.state.kind

    @property
    def admin(self) -> Optional[AdminIdentityRef]:
        if isinstance(self.state, Authenticated):
            return self.state.admin
        return None

    @property
    def return_to(self) -> Optional[str]:
        if isinstance(self.state, (Anonymous, OtpPending)):
            return self.state.return_to
        return None

    # Transitions

    def remember_return_to(self, path: str):
        """Keep the admin page an anonymous visitor asked for."""
        if isinstance(self.state, Anonymous):
            self.state = Anonymous(return_to=path)

    def begin_challenge(self, admin: AdminIdentityRef, challenge: OtpChallenge):
        """Anonymous (or re-login) -> OtpPending."""
        self.state = OtpPending(pending_admin=admin, challenge=challenge, return_to=self.return_to)

    def update_challenge(self, challenge: OtpChallenge):
        if isinstance(self.state, OtpPending):
            self.state = self.state.model_copy(update={"challenge": challenge})

    def clear_pending(self):
        """OtpPending -> Anonymous, keeping the post-login target."""
        self.state = Anonymous(return_to=self.return_to)

    def promote(self) -> Optional[str]:
        """
        OtpPending -> Authenticated.

        Returns:
            The remembered post-login target, if any
        """
        if not isinstance(self.state, OtpPending):
            raise ValueError("Only a pending session can be promoted")
        return_to = self.state.return_to
        self.state = Authenticated(admin=self.state.pending_admin)
        return return_to

    def destroy(self):
        """Any state -> Anonymous; the stored session is removed."""
        self.state = Anonymous()
        self.destroyed = True

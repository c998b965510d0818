"""Errors raised by account operations beyond plain validation failures."""


class AuthenticationFailed(Exception):
    """Credentials did not match an account."""

    def __init__(self, messages: dict | None = None):
        self.messages = messages or {"credentials": ["Invalid email or password"]}
        super().__init__(self.messages)


class PasswordRecoveryFailed(Exception):
    """The password reset email could not be delivered."""

    def __init__(self, messages: dict | None = None):
        self.messages = messages or {"email": ["Password reset email could not be sent"]}
        super().__init__(self.messages)

import bcrypt


class CodeHasher:
    """bcrypt hashing for one-time codes; plaintext codes are never stored."""

    @staticmethod
    def hash_code(code: str) -> str:
        """Hash a one-time code using bcrypt."""
        salt = bcrypt.gensalt()
        hashed = bcrypt.hashpw(code.encode("utf-8"), salt)
        return hashed.decode("utf-8")

    @staticmethod
    def check_code(code: str, hashed_code: str) -> bool:
        """Check if a code matches the hashed version."""
        try:
            return bcrypt.checkpw(code.encode("utf-8"), hashed_code.encode("utf-8"))
        except ValueError:
            # Malformed hash in storage
            return False

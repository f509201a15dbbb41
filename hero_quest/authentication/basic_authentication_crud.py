import hashlib
import logging
import re
import secrets
from sqlalchemy.ext.asyncio import AsyncSession

from hero_quest.crud import CreateData, ReadData
from hero_quest.models.basic_authentication_models import IdentityModel
from hero_quest.load_secrets import pepper_data

ADDRESS_BYTES = 32
# 0x followed by at most 32 bytes of hex, the form treasure seeds are derived from
ADDRESS_PATTERN = re.compile(r"0x[0-9a-f]{1,64}")


def hash_password(password: str, salt: str) -> str:
    return hashlib.sha256((password + salt + pepper_data).encode()).hexdigest()


def generate_address() -> str:
    return "0x" + secrets.token_hex(ADDRESS_BYTES)


def normalize_address(address: str) -> str:
    """Lower-case a caller-chosen address and check its form

    Raises:
        ValueError: address is not 0x followed by 1 to 64 hex digits
    """
    normalized = address.strip().lower()
    if not ADDRESS_PATTERN.fullmatch(normalized):
        raise ValueError(
            f"address must be 0x followed by 1 to {ADDRESS_BYTES * 2} hex digits, got {address!r}"
        )
    return normalized


class CreateAuthentication:

    @staticmethod
    async def create_identity(
        password: str, session: AsyncSession, address: str | None = None
    ) -> str:
        """Create an identity that can authenticate with the given password

        Args:
            password (str): Plain password; only its salted hash is stored
            address (str | None): Fixed address to use, otherwise a new one is generated

        Raises:
            ValueError: the fixed address is not a hex address

        Returns:
            str: The address of the identity
        """
        address = normalize_address(address) if address else generate_address()
        salt = secrets.token_hex(8)
        await CreateData.add_identity(address, hash_password(password, salt), salt, session)
        logging.info(f"Created identity {address}")
        return address


class ReadAuthentication:
    @staticmethod
    async def read_identity(address: str, session: AsyncSession) -> IdentityModel | None:
        """Read identity data to get salt and password hash

        Args:
            address (str): address of the identity

        Returns:
            IdentityModel | None: address, password hash and salt
        """
        result = await ReadData.read_identity(address, session)
        if result is None:
            logging.warning(f"Identity not found: {address}")
            return None
        return IdentityModel(
            address=result.address,
            hash_password=result.hash_password,
            salt=result.salt,
        )

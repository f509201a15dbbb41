import argparse
import asyncio
import secrets

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBasic, HTTPBasicCredentials

from hero_quest.authentication.basic_authentication_crud import (
    CreateAuthentication,
    ReadAuthentication,
    hash_password,
    normalize_address,
)
from hero_quest.crud import CreateData
from hero_quest.db import Session, engine
from hero_quest.models.basic_authentication_models import IdentityModel
from hero_quest.services import game_db

security = HTTPBasic()
create_auth = CreateAuthentication()
read_auth = ReadAuthentication()


class BasicAuthentication:
    def __init__(self):
        pass

    async def check_identity(
        self, credentials: HTTPBasicCredentials = Depends(security)
    ) -> str:
        """Resolve the caller identity from HTTP Basic credentials

        Args:
            credentials (HTTPBasicCredentials, optional): username is the address. Defaults to Depends(security).

        Raises:
            HTTPException: The address has no identity
            HTTPException: The password is incorrect

        Returns:
            str: The authenticated caller address
        """
        async with Session() as session:
            identity: IdentityModel | None = await read_auth.read_identity(
                credentials.username, session
            )
        if identity is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid address",
                headers={"WWW-Authenticate": "Basic"},
            )

        hashed_password = hash_password(credentials.password, identity.salt)
        if not secrets.compare_digest(hashed_password, identity.hash_password):
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Invalid password",
                headers={"WWW-Authenticate": "Basic"},
            )
        return identity.address

    async def store_identity(self, password: str, address: str | None = None) -> str:
        async with Session() as session:
            async with session.begin():
                return await create_auth.create_identity(password, session, address)


def get_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Create a caller identity")
    parser.add_argument("--password", type=str, help="Password", required=True)
    parser.add_argument(
        "--address", type=normalize_address, help="Use this hex address instead of a generated one"
    )
    parser.add_argument("--admin", action="store_true", help="Also add the identity to the admin set")
    return parser


async def main(password: str, address: str | None, admin: bool):
    await CreateData.create_table(engine)
    basic_auth = BasicAuthentication()
    address = await basic_auth.store_identity(password, address)
    if admin:
        await game_db.bootstrap_game(address)
    print(address)


if __name__ == "__main__":
    parser = get_parser()
    args = parser.parse_args()
    asyncio.run(main(args.password, args.address, args.admin))

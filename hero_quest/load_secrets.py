import os
from dotenv import load_dotenv

load_dotenv()

user = os.getenv("DB_USER")
password = os.getenv("DB_PASSWORD")
host = os.getenv("DB_HOST")
port = os.getenv("DB_PORT")
db_name = os.getenv("DB_NAME")
pepper_data = os.getenv("PEPPER_DATA", "")

# "sqlite" (default) or "postgres"
db_backend = os.getenv("DB_BACKEND", "sqlite")
sqlite_path = os.getenv("SQLITE_PATH")

# Identity that deploys the game; becomes the only member of the admin set.
deployer_address = os.getenv("DEPLOYER_ADDRESS")

if __name__ == "__main__":
    print(user, host, port, db_name, db_backend, sqlite_path, deployer_address)

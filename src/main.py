#!/usr/bin/env python3
"""
EXAUTH command line
Runs the web API, or provisions a login user in the users table.
"""

import argparse
import getpass
import logging
import os
import sys

from dotenv import load_dotenv
from mysql.connector import Error as MySQLError

from api.main import CONFIG_PATH_ENV, build_pool
from auth.authenticator import hash_password
from auth.connection_pool_manager import PoolCreationError
from config import DEFAULT_CONFIG_PATH, get_config, with_defaults
from infrastructure.unit_of_work import UnitOfWork
from repositories.user_repository import UserRepository

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
   parser = argparse.ArgumentParser(
      description='EXAUTH - cookie session authentication (uses cfg/config.yaml for defaults)',
      formatter_class=argparse.RawDescriptionHelpFormatter,
      epilog="""
   Examples:
     python main.py --api --config cfg/config.yaml
     python main.py --create-user alice --realname "Alice Example"

   Note: EXAUTH_DATABASE_URL overrides database.url from the config file.
      """
   )
   parser.add_argument('--config',
                       default=DEFAULT_CONFIG_PATH,
                       help=f'Path to config file (default: {DEFAULT_CONFIG_PATH})')
   parser.add_argument('--api',
                       action="store_true",
                       help='Launch the web API server (FastAPI)')
   parser.add_argument('--host',
                       default='127.0.0.1',
                       help='API server host (default: 127.0.0.1)')
   parser.add_argument('--port',
                       type=int,
                       default=8000,
                       help='API server port (default: 8000)')
   parser.add_argument('--create-user',
                       metavar='USERNAME',
                       help='Create a login user (password is prompted)')
   parser.add_argument('--realname',
                       default='',
                       help='Real name for --create-user')
   return parser


def create_user(config: dict, username: str, realname: str, password: str) -> int:
   """Inserts a user with a bcrypt password hash and returns its id."""
   pool_manager = build_pool(config)
   try:
      with pool_manager.connection() as conn:
         with UnitOfWork(conn) as uow:
            return UserRepository(uow).insert_user(username, realname, hash_password(password))
   finally:
      pool_manager.close()


def main(argv=None) -> int:
   load_dotenv()
   logging.basicConfig(
      level=logging.INFO,
      format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
   )

   parser = build_parser()
   args = parser.parse_args(argv)

   if not args.api and not args.create_user:
      parser.error("nothing to do: use --api or --create-user")

   try:
      config = with_defaults(get_config(args.config))
   except (RuntimeError, ValueError) as e:
      logger.error(f"Invalid configuration: {e}")
      return 1

   if args.create_user:
      password = getpass.getpass(f"Password for {args.create_user}: ")
      if not password:
         parser.error("password must not be empty")
      try:
         user_id = create_user(config, args.create_user, args.realname, password)
      except PoolCreationError as e:
         logger.error(f"Cannot connect to database: {e}")
         return 1
      except MySQLError as e:
         logger.error(f"Failed to create user {args.create_user}: {e}")
         return 1
      print(f"Created user {args.create_user} (id {user_id})")

   if args.api:
      import uvicorn

      os.environ[CONFIG_PATH_ENV] = args.config
      print(f"Starting EXAUTH API server on http://{args.host}:{args.port}")
      print(f"API Documentation: http://{args.host}:{args.port}/api/docs")

      uvicorn.run(
         "api.main:app",
         host=args.host,
         port=args.port,
         reload=False,
         log_level="info"
      )

   return 0


if __name__ == "__main__":
   sys.exit(main())

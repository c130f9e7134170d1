"""Walk through a complete user lifecycle against a Point API deployment.

The flow registers a user, confirms the e-mail with the code typed in by
the operator, logs in, renews the access token, lists users and finally
deletes the registered user. Every step prints the request name and the
JSON response.

Examples
--------
.. code-block:: bash

    point-api-example --email me@example.com --login me --password secret
    POINT_API_URL=http://localhost:3000 point-api-example --email ...
"""

import argparse
import asyncio
import json
import logging
from typing import Any, Awaitable, Callable, Optional

from dotenv import load_dotenv

from .client import ApiClient
from .config.settings import get_settings
from .utils.security import setup_logging

logger = logging.getLogger(__name__)


async def show(name: str, call: Awaitable[Any]) -> Any:
    """Print ``name``, await ``call`` and print its result."""
    print(f">>> {name}")
    result = await call
    print("<<<", json.dumps(result, indent=2, ensure_ascii=False), "\n")
    return result


async def run_flow(
    client: ApiClient,
    email: str,
    login: str,
    password: str,
    ask: Callable[[str], str] = input,
) -> None:
    """Run the example flow with ``client``.

    :param client: Client bound to the target deployment
    :type client: ApiClient
    :param email: E-mail of the user to register
    :type email: str
    :param login: Login of the user to register
    :type login: str
    :param password: Password of the user to register
    :type password: str
    :param ask: Prompt used to read the confirmation code
    :type ask: Callable[[str], str]
    """
    user = {"email": email, "login": login, "password": password}

    registered = await show("Register new user", client.register_new_user(user))
    user_id: Optional[Any] = registered.get("id") if isinstance(registered, dict) else None

    code = await asyncio.get_running_loop().run_in_executor(
        None, ask, "Enter code from e-mail: "
    )
    await show(
        "Email confirmation",
        client.check_registered_email({"email": email, "code": code.strip()}),
    )

    result = await show("Get token", client.login({"email": email, "password": password}))
    refresh = result.get("refresh") if isinstance(result, dict) else None

    await show("Renew access token by refresh", client.refresh_access_token({"refresh": refresh}))
    await show("Register the same user, example of error", client.register_new_user(user))
    await show(
        "Get 2 users on first page, only id and login fields, sort by time created desc",
        client.get_users(
            {"_limit": 2, "_page": 1, "_fields": "id,login", "_sort": "-timeCreated"}
        ),
    )
    await show("Get information about owner of token", client.get_me_in_users())

    if user_id is None:
        logger.warning("Registration returned no id; skipping user lookup and delete")
        return

    await show("Get information about user by userId", client.get_users_by_id(user_id))
    await show("Delete user", client.delete_user_by_id(user_id))
    await show("Get information about user by userId", client.get_users_by_id(user_id))


def main() -> None:
    """Parse arguments and run the example flow."""
    load_dotenv()
    settings = get_settings()
    setup_logging(level=settings.log_level)

    parser = argparse.ArgumentParser(description="Point API example user flow")
    parser.add_argument("--url", default=settings.api_url)
    parser.add_argument("--email", required=True)
    parser.add_argument("--login", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()

    async def _run() -> None:
        async with ApiClient(args.url, settings=settings) as client:
            await run_flow(client, args.email, args.login, args.password)

    logger.info("Running example flow against %s", args.url)
    asyncio.run(_run())


if __name__ == "__main__":
    main()

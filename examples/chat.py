"""A small chat client command line built with schemargs."""
from schemargs import ArgumentsParser, run
from schemargs.logger import logger
from schemargs.utils import setup_logging

setup_logging()


async def login(parser: ArgumentsParser):
    """Log in to the chat server."""
    options = await parser.options(
        {
            "username": {
                "type": str,
                "required": True,
                "short": "u",
                "description": "Name of the account",
            },
            "password": {"type": str, "required": True, "len": "6-", "secret": True},
            "server": {
                "type": dict,
                "schema": {
                    "host": {"type": str, "default": "localhost"},
                    "port": {"type": int, "default": 6667, "range": "1-65535"},
                },
            },
            "remember": {"type": bool, "description": "Keep the session"},
        }
    )
    logger.info("Logging in as %s", options["username"])
    print(f"Logged in as {options['username']} on {options['server']['host']}")


async def message(parser: ArgumentsParser):
    """Send a message to a channel."""
    options = await parser.options(
        {
            "channel": {"type": str, "required": True, "short": "c"},
            "mention": {"type": list, "description": "Users to mention"},
            "priority": {"enum": ["low", "normal", "high"], "default": "normal"},
        },
        variadic="allow",
    )
    if not options.rest and not options.non_options:
        options.on_error("Nothing to send.")
    text = " ".join(options.rest + ([options.non_options] if options.non_options else []))
    print(f"#{options['channel']} ({options['priority']}): {text}")


async def greet(parser: ArgumentsParser):
    """Print a greeting."""
    values = await parser.values(
        {
            "name": {"type": str, "required": True},
            "greeting": {"type": str, "default": "Hello"},
        }
    )
    print(f"{values['greeting']}, {values['name']}!")


async def admin(parser: ArgumentsParser):
    """Administration commands."""

    async def kick(parser: ArgumentsParser):
        """Kick a user from a channel."""
        values = await parser.values({"user": {"type": str, "required": True}})
        print(f"Kicked {values['user']}")

    async def uptime(parser: ArgumentsParser):
        """Show server uptime."""
        await parser.empty()
        print("up 3 days")

    return await parser.command({"kick": kick, "uptime": uptime})


if __name__ == "__main__":
    run({"login": login, "message": message, "greet": greet, "admin": admin})

"""
One-time campaign creation script.

Sends a single createCampaign transaction from the configured sender account
and logs the resulting status message.
"""
import argparse
import asyncio

from bittensor.utils.btlogging import logging

from afunding.app import create_app, get_config


async def create_campaign():
    parser = argparse.ArgumentParser()
    parser.add_argument("--title", type=str, required=True, help="Campaign title.")
    parser.add_argument("--description", type=str, default="", help="Campaign description.")
    parser.add_argument("--goal", type=str, required=True, help="Funding goal as an unsigned decimal.")
    config = get_config(parser)
    app = create_app(config)

    status = await app.submit(config.title, config.description, config.goal)
    logging.info(status)


def main():
    """Create one campaign."""
    asyncio.run(create_campaign())


if __name__ == "__main__":
    main()

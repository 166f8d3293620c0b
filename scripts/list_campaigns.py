"""
One-time campaign listing script.

Reads the current block number and every campaign in the contract once, then
logs the snapshot. Useful for checking a deployment without the UI.
"""
import asyncio

from bittensor.utils.btlogging import logging

from afunding.app import create_app, get_config


async def list_campaigns():
    app = create_app(get_config())

    home = app.mount_home()
    campaign_list = app.mount_campaign_list()
    await home
    await campaign_list

    block_number = app.block_number.get()
    logging.info(f"Current block number: {block_number if block_number is not None else 'unavailable'}")
    for campaign in app.campaigns.get():
        logging.info(
            f"#{campaign.id} {campaign.title!r} by {campaign.creator}: "
            f"{campaign.funds_raised} / {campaign.goal} "
            f"({'completed' if campaign.completed else 'open'})"
        )


def main():
    """List all campaigns once."""
    asyncio.run(list_campaigns())


if __name__ == "__main__":
    main()

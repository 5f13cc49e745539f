"""Push notification utilities for failed test runs."""

from loguru import logger
from pushbullet import Pushbullet

from utils.settings import get_settings

DEFAULT_TITLE = "ENKETO E2E FAILURE"


def send_error_notification(message: str, title: str = DEFAULT_TITLE) -> bool:
    """Send error notification via Pushbullet.

    Args:
        message: Error message to send
        title: Notification title

    Returns:
        True if the note was pushed
    """
    api_key = get_settings().pushbullet_api_key

    if not api_key:
        logger.warning("PUSHBULLET_API_KEY not set, skipping notification")
        return False

    try:
        pb = Pushbullet(api_key)
        pb.push_note(title, message)
    except Exception as e:
        logger.error(f"Failed to send Pushbullet notification: {e}")
        return False
    logger.info(f"Sent notification: {title}")
    return True

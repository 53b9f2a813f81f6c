"""Chat delivery."""

from sticker_hook.delivery.slack import Attachment, SlackWebhookClient, build_payload

__all__ = ["Attachment", "SlackWebhookClient", "build_payload"]

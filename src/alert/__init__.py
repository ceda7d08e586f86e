"""Alerters — one notification channel implementation per alert type."""

from .base import Alerter, format_alert
from .discord import DiscordAlerter
from .log import LogAlerter
from .slack import SlackAlerter
from .telegram import TelegramAlerter
from .webhook import WebhookAlerter

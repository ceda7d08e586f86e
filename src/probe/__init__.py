"""Probers — one health-check implementation per probe type."""

from .base import Prober, ProberConfig, Status, evaluate_duration
from .dns import DnsProbe
from .http import HttpProbe
from .ping import PingProbe
from .port import PortProbe
from .tls import TlsProbe

from __future__ import annotations


class NoValidDevices(Exception):
    """None of the targeted customers has a registered push device."""

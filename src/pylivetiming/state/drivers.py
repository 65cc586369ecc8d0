"""Driver roster processor."""

from __future__ import annotations

import logging

from pylivetiming.models.drivers import DriverList
from pylivetiming.state.processor import Processor

_logger = logging.getLogger(__name__)


class DriverListProcessor(Processor[DriverList]):
    """Roster state.

    ``Driver.is_selected`` is declared locally owned, so feed patches never
    change it; it is only flipped through :meth:`toggle_selected`.
    """

    data_type = DriverList

    def is_selected(self, driver_number: str) -> bool:
        """Unknown drivers count as selected."""
        driver = self.latest.drivers.get(driver_number)
        return driver.is_selected if driver is not None else True

    def selected_drivers(self) -> list[str]:
        return [number for number, driver in self.latest.drivers.items() if driver.is_selected]

    def toggle_selected(self, driver_number: str) -> bool:
        """Flip the selection flag for ``driver_number`` and return the new value.

        Raises
        ------
        KeyError
            When the driver is not in the roster.
        """

        def _toggle(working: DriverList) -> bool:
            driver = working.drivers[driver_number]
            driver.is_selected = not driver.is_selected
            return driver.is_selected

        selected = self.update(_toggle)
        _logger.debug("Driver %s selected=%s", driver_number, selected)
        return selected

"""
Confirmation dialog state.

A ConfirmDialog gates a destructive action behind an explicit confirmation.
Per open/close cycle exactly one of confirm or cancel takes effect; escape,
a backdrop click and the cancel button all count as cancel. While the
confirmed action is running (``loading``) nothing can close the dialog.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable

from mixer_admin.lib import logs

LOG = logs.logger(__file__)


class DialogVariant(str, Enum):
    PRIMARY = "primary"
    DANGER = "danger"
    WARNING = "warning"
    SUCCESS = "success"


@dataclass(frozen=True)
class VariantStyle:
    icon: str
    color: str
    confirm_label: str


VARIANT_STYLES: dict[DialogVariant, VariantStyle] = {
    DialogVariant.PRIMARY: VariantStyle("info", "blue", "Confirm"),
    DialogVariant.DANGER: VariantStyle("trash-2", "red", "Delete"),
    DialogVariant.WARNING: VariantStyle("triangle-alert", "amber", "Continue"),
    DialogVariant.SUCCESS: VariantStyle("circle-check", "green", "Confirm"),
}


class ConfirmDialog:
    """
    One confirmation dialog and the action it guards.

    Attributes:
        open: Whether the dialog is shown.
        title: Heading text.
        message: Body text.
        variant: Visual variant.
        confirm_label: Confirm button text; the variant's default when None.
        cancel_label: Cancel button text.
        loading: True while the confirmed action runs.
        prevent_backdrop_close: Ignore clicks on the backdrop.
    """

    def __init__(self) -> None:
        self.open = False
        self.title = ""
        self.message = ""
        self.variant = DialogVariant.PRIMARY
        self.confirm_label: str | None = None
        self.cancel_label = "Cancel"
        self.loading = False
        self.prevent_backdrop_close = False
        self._on_confirm: Callable[[], Any] | None = None
        self._on_cancel: Callable[[], Any] | None = None
        self._settled = True

    @property
    def style(self) -> VariantStyle:
        return VARIANT_STYLES[self.variant]

    def show(
        self,
        title: str,
        message: str,
        on_confirm: Callable[[], Any],
        variant: DialogVariant = DialogVariant.PRIMARY,
        confirm_label: str | None = None,
        cancel_label: str = "Cancel",
        on_cancel: Callable[[], Any] | None = None,
        prevent_backdrop_close: bool = False,
    ) -> None:
        """Open the dialog for a new action, replacing any settled one."""
        if self.loading:
            raise RuntimeError("Dialog is busy with a confirmed action")
        self.open = True
        self.title = title
        self.message = message
        self.variant = DialogVariant(variant)
        self.confirm_label = confirm_label
        self.cancel_label = cancel_label
        self.prevent_backdrop_close = prevent_backdrop_close
        self._on_confirm = on_confirm
        self._on_cancel = on_cancel
        self._settled = False

    def confirm(self) -> Callable[[], Any] | None:
        """
        Settle the dialog as confirmed.

        The dialog stays open in the loading state until finish() is called.

        Returns:
            The guarded action, or None when the dialog already settled.
        """
        if not self.open or self._settled:
            return None
        self._settled = True
        self.loading = True
        action, self._on_confirm = self._on_confirm, None
        self._on_cancel = None
        return action

    def finish(self) -> None:
        """Close the dialog after the confirmed action completed."""
        self.loading = False
        self.open = False

    def cancel(self) -> bool:
        """Settle the dialog as cancelled; ignored while loading or settled."""
        if not self.open or self._settled or self.loading:
            return False
        self._settled = True
        self.open = False
        on_cancel, self._on_cancel = self._on_cancel, None
        self._on_confirm = None
        if on_cancel is not None:
            on_cancel()
        return True

    def escape(self) -> bool:
        return self.cancel()

    def backdrop_click(self) -> bool:
        if self.prevent_backdrop_close:
            return False
        return self.cancel()

    def to_dict(self) -> dict:
        style = self.style
        return {
            "open": self.open,
            "title": self.title,
            "message": self.message,
            "variant": self.variant.value,
            "icon": style.icon,
            "color": style.color,
            "confirm_label": self.confirm_label or style.confirm_label,
            "cancel_label": self.cancel_label,
            "loading": self.loading,
            "prevent_backdrop_close": self.prevent_backdrop_close,
        }

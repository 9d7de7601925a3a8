"""Icons shared by the UI and CLI."""

ICON_CHECKED = "☑"
ICON_UNCHECKED = "☐"
ICON_LINKED = "📎"

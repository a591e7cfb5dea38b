"""lazyjira.

File a Jira ticket from the terminal:
- Jira connection settings loaded from `~/.config/lazyjira/config.yaml`
- an interactive Summary/Description form
- a single create-issue call
"""

__version__ = "0.1.0"

from lazyjira.config import JiraSettings, load_settings

__all__ = ["__version__", "JiraSettings", "load_settings"]

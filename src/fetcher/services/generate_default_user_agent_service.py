import platform

from docsignals.core.managers.config_manager import config_manager

# platform.system() -> platform token of a desktop Chrome user agent
OS_TOKENS = {
    "Windows": "Windows NT 10.0; Win64; x64",
    "Darwin": "Macintosh; Intel Mac OS X 10_15_7",
    "Linux": "X11; Linux x86_64",
}
DEFAULT_CHROME_VERSION = "120.0.0.0"


def generate_default_user_agent() -> str:
    """Desktop Chrome user agent for the current OS, using `user_agent.chrome_version`."""
    os_token = OS_TOKENS.get(platform.system(), "X11; Linux x86_64")
    chrome_version = config_manager.get_nested("user_agent.chrome_version", DEFAULT_CHROME_VERSION)
    return (
        f"Mozilla/5.0 ({os_token}) AppleWebKit/537.36 (KHTML, like Gecko) "
        f"Chrome/{chrome_version} Safari/537.36"
    )

"""User-facing system notices shown in the chat."""

WELCOME = "Welcome to Food Finder! What kind of food would you like recommendations for today?"

ASK_CALORIES = (
    "Sounds delicious! Roughly how many calories are you aiming for in this meal? (e.g., 500)"
)

SEARCHING = "Searching for food recommendations based on your preferences and calorie needs..."

LOADING_PLACEHOLDER = "..."

OFFLINE = "Network connection appears to be offline."

OFFLINE_SEND_REFUSED = (
    "Network connection appears to be offline. Please check your connection and try again."
)

RESTORED = "Network connection restored."

CONSENT_TITLE = "Internet Access Required"

CONSENT_DISCLOSURE = (
    "Food Finder needs access to the internet to fetch recommendations and recipes. "
    "Please ensure you are connected."
)

"""
Centralized reply copy for the chat engine.

Every fixed string a visitor can see lives here. Business-specific
values are injected from configuration, not hardcoded.
"""

from barberbot.config import settings

_biz = settings.business

DAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")

# --- Markers ---
FAQ_MARKER = "❓"
CLOCK_MARKER = "⏰"

# --- Placeholders ---
NO_DESCRIPTION = "No description available."
NO_BIO = "No bio available."
NO_DETAILS = "No details available."
NOT_AVAILABLE = "Not available"
NO_EXPIRATION = "No expiration date"

# --- Empty collection apologies ---
SERVICES_UNAVAILABLE = "I'm sorry, we couldn't load our service information right now."
BARBERS_UNAVAILABLE = "I'm sorry, we couldn't load our barber information right now."
LOCATION_UNAVAILABLE = "I'm sorry, we couldn't load our location information right now."
HOURS_UNAVAILABLE = "I'm sorry, we couldn't load our hours information right now."
# Shared by "no promotions at all" and "none currently active"
NO_ACTIVE_PROMOTIONS = "I'm sorry, we don't have any active promotions at this time."

# --- Headers ---
SERVICES_HEADER = "💇‍♂️ Our Services:"
BARBERS_HEADER = "👨‍💼 Our Talented Barbers:"
LOCATION_HEADER = "📍 Location Information:"
HOURS_HEADER = "⏰ Business Hours:"
PROMOTIONS_HEADER = "🎉 Current Promotions:"
MULTIPLE_SERVICES_HEADER = "I found several services that match your query:"

# --- Services ---
SINGLE_SERVICE = (
    "💇‍♂️ For a {name}, the price is ${price} and it takes about "
    "{duration} minutes.\n\n{description}\n\n"
    "Would you like to book an appointment for this service?"
)

# --- Barbers ---
BARBER_NOT_FOUND = "I'm sorry, I couldn't find information about a barber named \"{name}\"."
BARBER_AVAILABLE = "✅ Currently available for bookings"
BARBER_UNAVAILABLE = "❌ Not currently available for bookings"

# --- Location ---
LOCATION_FOOTER = "Feel free to visit us or book an appointment!"

# --- Hours ---
CLOSED_TODAY = "We're closed today."
OPEN_TODAY = "We're open today from {open_time} to {close_time}."

# --- Booking ---
BOOKING_OFFER = (
    "📅 Great! I can help you book an appointment. "
    "Would you like me to take you to our booking page?"
)
BOOKING_PROMPT = (
    "Click the 'Book an appointment now' link below to get started, "
    "or I can answer any other questions about our services first."
)
BOOKING_CONFIRMATION = "Great! I'll take you to our booking page now."

# --- Fallback ---
OUT_OF_SCOPE = (
    "I'm sorry, but I can only provide information about our barbershop services, "
    "barbers, locations, hours, and promotions. Is there anything specific about "
    f"{_biz.name} that I can help you with?"
)

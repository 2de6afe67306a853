"""Rule-based barbershop chat engine."""

"""Calendar-driven driving mileage deduction reports."""

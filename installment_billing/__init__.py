"""
Installment Billing - installment plans for point-of-sale purchases

A FastAPI service that generates amortization schedules, tracks payment
collection, sends reminders and produces summaries and payment reports.
"""

__version__ = "0.1.0"

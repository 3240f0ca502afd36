"""Subscription plans, quota enforcement and Stripe billing."""

"""
Credit Core - Credit Origination Decisioning

Turns applicant and financial signals into credit scores, customer
categories and approval decisions, tracks the application lifecycle,
handles refinancing, analyzes portfolio risk and evaluates fraud rules.
"""

__version__ = "0.1.0"

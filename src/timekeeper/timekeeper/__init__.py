"""Timekeeper package.

Feature modules (users, attendance, adjustments, leaves, stats) each carry a
model / repository / service layer with a thin Flask controller on top.
"""

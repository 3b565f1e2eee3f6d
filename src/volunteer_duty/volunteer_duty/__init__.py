"""Volunteer Duty package.

Duty sign-in/sign-out tracking, ambulance rescue records and monthly
statistics for a fire-brigade volunteer unit. Organized by feature modules
(activities, rescues, stats, users) with a thin Flask controller layer on top
of service/repository layers.
"""

"""Swipe Attendance package.

Rebuilds daily attendance records from raw biometric swipes. Organized by
pipeline stage (swipes, bursts, shifts, breaks, attendance, status) with a
thin Flask controller on top of the processing service.
"""

"""
Use Cases

Organized into domain folders:
- auth/: Email-OTP login flow
- session/: Signed-in user lookup
- admin/: Housekeeping

Import from subdirectories for better organization.
"""

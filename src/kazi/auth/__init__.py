"""Authentication and authorization.

Learn: Three pieces, all stateless:
1. password  → bcrypt digests for stored credentials
2. jwt       → signed 24h tokens carrying {sub, phone, role}
3. dependencies / ownership → per-request bearer gate and owner checks

Users → phone/password → JWT. There is no session store; a token is
trusted until it expires.
"""

"""
Roles and Capabilities Configuration
This config defines which orchestra roles may use which parts of the app.
Used by route dependencies and by /auth/me to drive the frontend navigation.
"""

# Roles, highest first
ROLES = ["SuperAdmin", "Admin", "User"]

DEFAULT_ROLE = "User"

# Define capabilities and what they unlock
CAPABILITIES = {
    "dashboard:access": "View the dashboard and attendance calendar",
    "schedules:access": "Edit your own rehearsal availability",
    "members:access": "View and manage member records",
    "roles:manage": "Change other users' roles",
}

# Capabilities per role
ROLE_CAPABILITIES = {
    "SuperAdmin": ["dashboard:access", "schedules:access", "members:access", "roles:manage"],
    "Admin": ["dashboard:access", "schedules:access", "members:access"],
    "User": ["dashboard:access", "schedules:access"],
}


def is_valid_role(role) -> bool:
    return role in ROLES


def role_can(role, capability: str) -> bool:
    """True if the role grants the capability. Unknown or missing roles grant nothing."""
    if not role:
        return False
    return capability in ROLE_CAPABILITIES.get(role, [])


def get_capabilities(role) -> list:
    return sorted(ROLE_CAPABILITIES.get(role, [])) if role else []


# Generate capability matrix
def get_capability_matrix():
    """
    Returns a dictionary with all capabilities and the roles granting them
    Format: {
        "capabilities": [
            {"name": "members:access", "description": "...", "roles": ["SuperAdmin", "Admin"]},
            ...
        ],
        "roles": [
            {"name": "Admin", "capabilities": ["dashboard:access", ...]},
            ...
        ]
    }
    """
    capabilities = []
    for name, description in CAPABILITIES.items():
        capabilities.append({
            "name": name,
            "description": description,
            "roles": [role for role in ROLES if role_can(role, name)]
        })

    roles = [{"name": role, "capabilities": get_capabilities(role)} for role in ROLES]

    return {
        "capabilities": capabilities,
        "roles": roles
    }


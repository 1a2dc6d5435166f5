"""
Permissions and Capabilities Configuration
This config defines the capability matrix for every console module and the
closed set of roles that may hold capabilities.
Used by /auth/me (UI capability hints) and by the permission seed script.

Access to an individual record is decided by the resource guard in
app.core.authorization (admin, or owner of the record); this matrix only
describes which screens and actions a role is offered.
"""

from typing import Dict, List

from app.core.roles import Role

# Define modules and their CRUD actions
MODULES = {
    "users": {
        "resource": "users",
        "actions": ["create", "read", "update", "delete", "reset_password"],
        "description": "Console user management"
    },
    "resellers": {
        "resource": "resellers",
        "actions": ["create", "read", "update", "delete", "reset_password"],
        "description": "Reseller account management"
    },
    "consumers": {
        "resource": "consumers",
        "actions": ["create", "read", "update", "delete", "reset_password", "update_status"],
        "description": "Consumer account management"
    },
    "products": {
        "resource": "products",
        "actions": ["create", "read", "update", "delete"],
        "description": "Product catalogue management"
    },
    "brands": {
        "resource": "brands",
        "actions": ["create", "read", "update", "delete"],
        "description": "Brand management"
    },
    "payments": {
        "resource": "payments",
        "actions": ["create"],
        "description": "Payment link generation"
    },
}

# Capabilities per role. "*" grants every action of the module.
ROLE_CAPABILITIES: Dict[Role, Dict[str, List[str]]] = {
    Role.ADMIN: {module: ["*"] for module in MODULES},
    Role.RESELLER: {
        "consumers": ["create", "read", "update", "delete"],
        "resellers": ["read"],
        "brands": ["create", "read", "update", "delete"],
    },
    Role.CONSUMER: {
        "brands": ["create", "read", "update", "delete"],
    },
    Role.USER: {
        "brands": ["create", "read", "update", "delete"],
    },
    Role.SUPPORT: {
        "consumers": ["read"],
        "brands": ["read"],
    },
    Role.VIEWER: {
        "brands": ["read"],
    },
}

ROLE_DESCRIPTIONS = {
    Role.ADMIN: "Full access to every console module",
    Role.RESELLER: "Manages the consumers and resellers they referred",
    Role.CONSUMER: "End customer with product subscriptions",
    Role.VIEWER: "Read-only console access",
    Role.SUPPORT: "Customer support staff",
    Role.USER: "Regular console user",
}

# Additional descriptions for non-CRUD actions
MODULE_SPECIFIC_PERMISSIONS = {
    "users": {
        "reset_password": "Reset another user's password"
    },
    "resellers": {
        "reset_password": "Reset a reseller's password"
    },
    "consumers": {
        "reset_password": "Reset a consumer's password",
        "update_status": "Activate, deactivate or expire a consumer account"
    },
    "payments": {
        "create": "Create encrypted payment links"
    },
}


def capabilities_for_roles(roles: List[Role]) -> List[str]:
    """Union of "<resource>:<action>" capabilities held by any of the given roles."""
    capabilities = set()
    for role in roles:
        for module_name, actions in ROLE_CAPABILITIES.get(role, {}).items():
            module_actions = MODULES[module_name]["actions"]
            granted = module_actions if "*" in actions else [a for a in actions if a in module_actions]
            for action in granted:
                capabilities.add(f"{MODULES[module_name]['resource']}:{action}")
    return sorted(capabilities)


# Generate permission matrix
def get_permission_matrix():
    """
    Returns a dictionary with all permissions and the roles holding them
    Format: {
        "permissions": [
            {"name": "brands:create", "resource": "brands", "action": "create", "description": "..."},
            ...
        ],
        "roles": [
            {"name": "reseller", "description": "...", "permissions": ["brands:create", ...]},
            ...
        ]
    }
    """
    permissions = []
    for module_name, module_config in MODULES.items():
        resource = module_config["resource"]
        for action in module_config["actions"]:
            description = f"{action.capitalize()} {resource}"
            if action in MODULE_SPECIFIC_PERMISSIONS.get(module_name, {}):
                description = MODULE_SPECIFIC_PERMISSIONS[module_name][action]
            permissions.append({
                "name": f"{resource}:{action}",
                "resource": resource,
                "action": action,
                "description": description
            })

    roles = [
        {
            "name": role.value,
            "description": ROLE_DESCRIPTIONS[role],
            "permissions": capabilities_for_roles([role]),
        }
        for role in Role
    ]

    return {
        "permissions": permissions,
        "roles": roles
    }


# Export the matrix for use in seed scripts
PERMISSION_MATRIX = get_permission_matrix()

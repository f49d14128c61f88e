# core/constants.py

# --- Trust ledger reasons (Standard Registry) ---

# Unit closed as COMPLETED, every member rewarded
REASON_TEAM_COMPLETED = "team.completed"
REASON_PROJECT_COMPLETED = "project.completed"

# Join/invite accepted, joining user rewarded
REASON_TEAM_JOINED = "team.joined"
REASON_PROJECT_JOINED = "project.joined"

REASONS = {
    "team": {
        "completed": REASON_TEAM_COMPLETED,
        "joined": REASON_TEAM_JOINED,
    },
    "project": {
        "completed": REASON_PROJECT_COMPLETED,
        "joined": REASON_PROJECT_JOINED,
    },
}

# Query scopes for unit listings
SCOPE_ALL = "ALL"
SCOPE_REQUESTED = "REQUESTED"

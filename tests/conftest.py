import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import copy
import pytest

SAMPLE_DOC = {
    "classification": "Real-time collaborative whiteboard for remote product teams",
    "buildApproach": "Code",
    "stack": [
        {"name": "Next.js", "category": "Frontend", "description": "Fast to scaffold and deploy."},
        {"name": "Supabase", "category": "Backend", "description": "Auth, realtime and Postgres in one."},
        {"name": "Postgres", "category": "Database", "description": "Comes with Supabase."},
        {"name": "Linear", "category": "Team collab", "description": "Lightweight issue tracking."},
        {"name": "Vercel", "category": "Hosting", "description": "Zero-config deploys for Next.js."},
    ],
    "whatNotToUse": [
        {"tool": "Kubernetes", "reason": "Operational overhead with no users yet."},
        {"tool": "Microservices", "reason": "One team, one deployable."},
    ],
    "mvpCutLine": {
        "mustBuild": ["Shared canvas", "Live cursors", "Invite link"],
        "mustCut": ["Video chat", "Templates marketplace"],
    },
    "commonMistake": "Building a custom CRDT engine before anyone draws a single box.",
    "whyThisStackWins": [
        "Realtime comes for free with Supabase.",
        "One deploy target keeps shipping fast.",
    ],
}


@pytest.fixture
def sample_doc():
    return copy.deepcopy(SAMPLE_DOC)

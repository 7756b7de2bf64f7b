"""
Use Cases

Organized by area; import from the subpackages:
- workspaces/: workspace directory
- users/: identity resolution and context
- memberships/: membership registry
- invites/: invite ledger
- challenges/: challenge catalog
- enrollments/: enrollment store
- submissions/: submission review workflow
- points/: points ledger, budgets and leaderboards
- rewards/: reward issuance and webhook reconciliation
- activity/: activity event log
"""

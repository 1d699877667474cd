# File: sales_tracker/services/seed.py
"""
Deterministic demo data for the dashboard.
"""

from datetime import timedelta
from typing import List

from sales_tracker.core.clock import SystemClock
from sales_tracker.models import Task, Priority, Status

SALES_TITLES = [
    'Prospect outreach', 'Demo scheduling', 'Product demo', 'Proposal drafting',
    'Contract negotiation', 'Follow-up emails', 'Lead qualification', 'Account discovery',
    'Pricing review', 'Quarterly business review', 'Customer success handoff', 'Lead list cleanup',
    'CRM data entry', 'Renewal discussion', 'Upsell opportunity review', 'Cross-sell campaign',
    'Cold calling block', 'Sequence optimization', 'Inbound lead response', 'Outbound campaign setup',
    'LinkedIn networking', 'Case study sharing', 'Trial activation support', 'PO processing',
    'Security questionnaire', 'Technical validation call', 'Competitor analysis', 'Territory planning',
    'Pipeline review', 'Forecast update', 'Lead nurturing', 'Email template A/B test',
    'Webinar follow-up', 'Event leads import', 'MQL to SQL handoff', 'Warm intro request',
    'Sales deck refresh', 'Objection handling prep', 'Referral outreach', 'Lost deal review',
    'Win story write-up', 'Channel partner sync', 'Trial usage review', 'POC scoping',
    'Implementation planning', 'Champion alignment', 'Economic buyer meeting', 'Legal review coordination',
    'Signature collection', 'Onboarding kickoff',
]

PRIORITY_CYCLE = [Priority.HIGH, Priority.MEDIUM, Priority.LOW]
STATUS_CYCLE = [Status.TODO, Status.IN_PROGRESS, Status.DONE]
REVENUE_MULTIPLIER = {Priority.HIGH: 8, Priority.MEDIUM: 4, Priority.LOW: 2}


def generate_sales_tasks(count: int, clock=None) -> List[Task]:
    """Generate `count` sales tasks spread backwards in time from clock.now()."""
    now = (clock or SystemClock()).now()
    tasks = []
    for i in range(count):
        priority = PRIORITY_CYCLE[i % len(PRIORITY_CYCLE)]
        status = STATUS_CYCLE[(i + 1) % len(STATUS_CYCLE)]
        revenue_base = 150 + (i % 12) * 75
        revenue = round((revenue_base + (i % 5) * 40) * REVENUE_MULTIPLIER[priority])
        created_at = now - timedelta(hours=i * 36 + (i % 7) * 12)
        completed_at = created_at + timedelta(days=(i % 10) + 1) if status == Status.DONE else None

        tasks.append(Task(
            id=f"t-{2001 + i}",
            title=f"{SALES_TITLES[i % len(SALES_TITLES)]} #{i + 1}",
            revenue=float(revenue),
            time_taken=float(1 + (i * 3) % 10),
            priority=priority,
            status=status,
            created_at=created_at,
            completed_at=completed_at,
        ))
    return tasks

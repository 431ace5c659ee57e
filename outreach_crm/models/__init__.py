# Models package - database tables
from outreach_crm.models.user import User
from outreach_crm.models.campaign import Campaign
from outreach_crm.models.lead import Lead
from outreach_crm.models.outreach import Message, MessageTemplate

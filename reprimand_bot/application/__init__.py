"""Application layer for Reprimand Bot.

Ports define the contracts of external collaborators; services
orchestrate domain rules against those ports.
"""

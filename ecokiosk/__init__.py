"""
EcoKiosk — simulated self-service recycling kiosk.

Step flow, points tally and AI eco-fact orchestration behind a FastAPI surface.
"""

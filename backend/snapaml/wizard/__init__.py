"""Multi-step onboarding wizard: step tables, engine and persistence."""

"""Job Jotter: job application tracking API with Google Calendar integration."""

"""
                        Services Module

Collaborators of the console, each behind a small interface.

Services:
    - backend: REST client for the kiosk platform backend
    - translation: menu name translation (Mock / OpenAI)
    - imaging: menu image generation (Mock / OpenAI)
    - menu_autofill: fills in the English name and image of a new menu
"""

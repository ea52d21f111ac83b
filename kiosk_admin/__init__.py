"""
                Kiosk Admin Console

Administrative console for a restaurant kiosk-ordering platform.
Store owners manage store and category metadata, menu items (with
AI-assisted name translation and image generation), table/kiosk
activation, and live orders against the platform's backend API.
"""

__version__ = "1.0.0"

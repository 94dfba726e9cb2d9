#!/usr/bin/env python
"""
Script to run RabbitMQ consumer for Laundry Service notifications
"""
from laundry_service.logging_config import configure_logging
from laundry_service.consumers.notification_consumer import start_consumer

if __name__ == "__main__":
    configure_logging()
    start_consumer()

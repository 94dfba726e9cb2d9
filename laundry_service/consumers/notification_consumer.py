"""
RabbitMQ Consumer for OrderStatusChanged and BatchCompleted events
"""
import json
import logging
import sys

import pika

from laundry_service.config import settings
from laundry_service.publishers.event_publisher import ROUTING_KEYS, ORDER_STATUS_CHANGED, BATCH_COMPLETED
from laundry_service.services.notification_service import NotificationService

logger = logging.getLogger(__name__)


def handle_event(event: dict, notification_service: NotificationService) -> bool:
    """
    Route one decoded event to the notification service
    
    Returns:
        True if the event was handled
    """
    event_type = event.get("event_type")
    event_data = event.get("data", {})
    
    if event_type == ORDER_STATUS_CHANGED:
        return notification_service.send_order_status_changed_notification(event_data)
    elif event_type == BATCH_COMPLETED:
        # Customers were notified in-process when the batch was marked complete
        logger.info(
            "Batch %s completed (%s orders, notified=%s)",
            event_data.get("batch_number"), event_data.get("orders"), event_data.get("notified")
        )
        return True
    else:
        logger.warning("Unknown event type: %s", event_type)
        return False


def callback(ch, method, properties, body):
    """
    Callback function to process laundry events
    
    Args:
        ch: Channel
        method: Method
        properties: Properties
        body: Message body (JSON string)
    """
    try:
        event = json.loads(body)
        event_id = event.get("event_id")
        logger.info("Received event: %s (ID: %s)", event.get("event_type"), event_id)
        
        success = handle_event(event, NotificationService())
        
        if success:
            ch.basic_ack(delivery_tag=method.delivery_tag)
            logger.info("✓ Event %s processed successfully", event_id)
        else:
            # Reject and don't requeue
            ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
            logger.warning("✗ Event %s processing failed", event_id)
            
    except json.JSONDecodeError as e:
        logger.error("✗ Invalid JSON: %s", e)
        ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)
    except Exception as e:
        logger.exception("✗ Error processing event: %s", e)
        ch.basic_nack(delivery_tag=method.delivery_tag, requeue=False)


def start_consumer():
    """
    Start RabbitMQ consumer
    
    Connects to RabbitMQ and starts consuming laundry events
    """
    connection = None
    try:
        logger.info("Connecting to RabbitMQ: %s", settings.RABBITMQ_URL)
        connection = pika.BlockingConnection(
            pika.URLParameters(settings.RABBITMQ_URL)
        )
        channel = connection.channel()
        
        channel.exchange_declare(
            exchange=settings.RABBITMQ_EXCHANGE,
            exchange_type='topic',
            durable=True
        )
        channel.queue_declare(
            queue=settings.RABBITMQ_QUEUE,
            durable=True
        )
        for routing_key in ROUTING_KEYS.values():
            channel.queue_bind(
                exchange=settings.RABBITMQ_EXCHANGE,
                queue=settings.RABBITMQ_QUEUE,
                routing_key=routing_key
            )
            logger.info("✓ Queue %s bound to %s", settings.RABBITMQ_QUEUE, routing_key)
        
        # Set prefetch count (QoS)
        channel.basic_qos(prefetch_count=5)
        
        channel.basic_consume(
            queue=settings.RABBITMQ_QUEUE,
            on_message_callback=callback,
            auto_ack=False  # Manual acknowledgement
        )
        
        logger.info("✓ %s consumer started, waiting for events", settings.SERVICE_NAME)
        channel.start_consuming()
        
    except KeyboardInterrupt:
        logger.info("Consumer stopped by user")
        if connection is not None and connection.is_open:
            connection.close()
        sys.exit(0)
    except Exception as e:
        logger.error("✗ Error starting consumer: %s", e)
        sys.exit(1)

"""
RabbitMQ Event Publisher
"""
import json
import logging
import uuid
from datetime import datetime, timezone
from typing import Dict

import pika

from laundry_service.config import settings

logger = logging.getLogger(__name__)

ORDER_STATUS_CHANGED = "OrderStatusChanged"
BATCH_COMPLETED = "BatchCompleted"

ROUTING_KEYS = {
    ORDER_STATUS_CHANGED: "order.status.changed",
    BATCH_COMPLETED: "batch.completed",
}


class EventPublisher:
    """Publisher for sending events to RabbitMQ"""
    
    def __init__(self):
        self.rabbitmq_url = settings.RABBITMQ_URL
        self.exchange = settings.RABBITMQ_EXCHANGE
        self.enabled = settings.EVENTS_ENABLED
    
    @staticmethod
    def build_event(event_type: str, data: Dict) -> Dict:
        """Wrap event data in the common envelope"""
        return {
            "event_type": event_type,
            "event_id": str(uuid.uuid4()),
            "event_version": "1.0",
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "source": settings.SERVICE_NAME,
            "data": data
        }
    
    def publish(self, event_type: str, data: Dict) -> bool:
        """
        Publish an event to the topic exchange
        
        Args:
            event_type: One of the known event types
            data: Event payload
        
        Returns:
            True if published successfully, False otherwise
        """
        if not self.enabled:
            logger.debug("Events disabled, skipping %s", event_type)
            return False
        
        event = self.build_event(event_type, data)
        try:
            connection = pika.BlockingConnection(
                pika.URLParameters(self.rabbitmq_url)
            )
            try:
                channel = connection.channel()
                channel.exchange_declare(
                    exchange=self.exchange,
                    exchange_type='topic',
                    durable=True
                )
                
                # Enable publisher confirms
                channel.confirm_delivery()
                
                channel.basic_publish(
                    exchange=self.exchange,
                    routing_key=ROUTING_KEYS[event_type],
                    body=json.dumps(event),
                    properties=pika.BasicProperties(
                        delivery_mode=2,  # Persistent message
                        content_type='application/json',
                        correlation_id=event["event_id"]
                    ),
                    mandatory=False
                )
            finally:
                connection.close()
            
            logger.info("✓ Event published: %s (ID: %s)", event_type, event["event_id"])
            return True
            
        except Exception as e:
            logger.warning("✗ Error publishing %s event: %s", event_type, e)
            return False
    
    def publish_order_status_changed(self, order_data: Dict) -> bool:
        """Publish OrderStatusChanged event"""
        return self.publish(ORDER_STATUS_CHANGED, order_data)
    
    def publish_batch_completed(self, batch_data: Dict) -> bool:
        """Publish BatchCompleted event"""
        return self.publish(BATCH_COMPLETED, batch_data)

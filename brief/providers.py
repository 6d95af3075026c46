"""
External service providers used by the pipeline.

The pipeline only talks to the two interfaces below, so tests can swap in
fakes and a provider change never touches pipeline logic.
"""

from abc import ABC, abstractmethod

import google.generativeai as genai
import requests

from .models import DeliveryError, OutboundEmail

RESEND_API_URL = 'https://api.resend.com/emails'


class TextGenerationProvider(ABC):
    @abstractmethod
    def generate(self, prompt: str, max_output_tokens: int) -> str:
        raise NotImplementedError


class EmailProvider(ABC):
    @abstractmethod
    def send(self, email: OutboundEmail) -> str:
        raise NotImplementedError


class GeminiProvider(TextGenerationProvider):
    def __init__(self, api_key: str, model: str = 'gemini-2.0-flash'):
        self.api_key = api_key
        self.model = model
        # The SDK keeps the key globally, so configure once per provider
        if api_key:
            genai.configure(api_key=api_key)

    def generate(self, prompt: str, max_output_tokens: int) -> str:
        if not self.api_key:
            raise RuntimeError('GEMINI_API_KEY not configured')

        model = genai.GenerativeModel(self.model)
        response = model.generate_content(
            prompt,
            generation_config={'max_output_tokens': max_output_tokens}
        )
        return response.text.strip()


class ResendProvider(EmailProvider):
    """Transactional email via the Resend HTTP API."""

    def __init__(self, api_key: str, from_address: str, timeout: float = 15):
        self.api_key = api_key
        self.from_address = from_address
        self.timeout = timeout

    def send(self, email: OutboundEmail) -> str:
        """
        POST the email once. Returns the provider message id.

        Raises:
            DeliveryError: with the provider's own message when it rejects
                the send, or the transport error when it can't be reached.
        """
        if not self.api_key:
            raise DeliveryError('RESEND_API_KEY not configured')

        try:
            response = requests.post(
                RESEND_API_URL,
                headers={
                    'Authorization': f'Bearer {self.api_key}',
                    'Content-Type': 'application/json',
                },
                json={
                    'from': self.from_address,
                    'to': [email.recipient],
                    'subject': email.subject,
                    'html': email.html_body,
                },
                timeout=self.timeout
            )
        except requests.exceptions.Timeout:
            raise DeliveryError('Email provider request timed out')
        except requests.exceptions.RequestException as e:
            raise DeliveryError(f'Email provider request failed: {str(e)}')

        if not response.ok:
            message = _provider_error_message(response)
            print(f"Resend API error ({response.status_code}): {message}")
            raise DeliveryError(message, status_code=response.status_code)

        try:
            message_id = response.json().get('id', '')
        except ValueError:
            message_id = ''
        print(f"Email sent to {email.recipient} (id={message_id or 'unknown'})")
        return message_id


def _provider_error_message(response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text.strip() or 'Failed to send email'
    if isinstance(data, dict) and data.get('message'):
        return data['message']
    return 'Failed to send email'

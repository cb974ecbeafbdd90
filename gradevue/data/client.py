"""SOAP client for the StudentVUE ``PXPCommunication`` web service."""

import logging
from typing import Optional, Union

import requests
from lxml import etree

from config.settings import Settings, get_settings

from .attributes import Attributes
from .decoder import decode_gradebook
from .errors import (
    ExpectedPayloadNotFound,
    MissingAttribute,
    RemoteError,
    RemoteErrorParsingFailed,
    ResponseBodyNotFound,
    TransportError,
)
from .events import Characters, EndElement, StartElement, tokenize
from .models import Gradebook

logger = logging.getLogger(__name__)

SOAP_NS = "http://schemas.xmlsoap.org/soap/envelope/"
XSI_NS = "http://www.w3.org/2001/XMLSchema-instance"
XSD_NS = "http://www.w3.org/2001/XMLSchema"

ERROR_TAG = "RT_ERROR"


class PortalClient:
    """Client for fetching a student's gradebook from the portal."""

    def __init__(
        self,
        username: Optional[str] = None,
        password: Optional[str] = None,
        settings: Optional[Settings] = None,
        session: Optional[requests.Session] = None,
    ):
        self.settings = settings or get_settings()
        self.username = username if username is not None else self.settings.USERNAME
        self.password = password if password is not None else self.settings.PASSWORD
        self._session = session

    @property
    def session(self) -> requests.Session:
        """Lazy-loaded HTTP session."""
        if self._session is None:
            self._session = requests.Session()
        return self._session

    # -------------------------------------------------------------------------
    # Request building
    # -------------------------------------------------------------------------

    def build_request_body(self, method: str, params: str) -> bytes:
        """Wrap a web-service call in a SOAP 1.1 envelope."""
        ns = self.settings.SERVICE_NAMESPACE
        envelope = etree.Element(
            f"{{{SOAP_NS}}}Envelope",
            nsmap={"soap": SOAP_NS, "xsi": XSI_NS, "xsd": XSD_NS},
        )
        body = etree.SubElement(envelope, f"{{{SOAP_NS}}}Body")
        request = etree.SubElement(body, f"{{{ns}}}ProcessWebServiceRequest", nsmap={None: ns})

        fields = [
            ("userID", self.username),
            ("password", self.password),
            ("skipLoginLog", "1"),
            ("parent", "0"),
            ("webServiceHandleName", self.settings.WEB_SERVICE_HANDLE),
            ("methodName", method),
            # Sent as escaped text, not as child elements
            ("paramStr", params),
        ]
        for name, value in fields:
            etree.SubElement(request, f"{{{ns}}}{name}").text = value

        return etree.tostring(envelope, xml_declaration=True, encoding="utf-8")

    def perform(self, method: str, params: str, expect: Optional[str] = None) -> str:
        """Call a web-service method and return the inner payload XML."""
        body = self.build_request_body(method, params)
        headers = {
            "Content-Type": "text/xml; charset=utf-8",
            "SOAPAction": self.settings.SOAP_ACTION,
        }

        logger.debug("Calling portal method %s at %s", method, self.settings.ENDPOINT)
        try:
            response = self.session.post(
                self.settings.ENDPOINT,
                data=body,
                headers=headers,
                timeout=self.settings.TIMEOUT_SECONDS,
            )
            response.raise_for_status()
        except requests.RequestException as e:
            logger.error("Portal request for %s failed: %s", method, e)
            raise TransportError(str(e)) from e

        return extract_payload(response.content, expect or method)

    # -------------------------------------------------------------------------
    # Gradebook
    # -------------------------------------------------------------------------

    def retrieve_gradebook(self, report_period: Optional[int] = None) -> Gradebook:
        """Fetch and decode the gradebook, for the current period by default.

        ``report_period`` is a ``ReportPeriod.index`` from an earlier snapshot.
        """
        method = self.settings.GRADEBOOK_METHOD
        payload = self.perform(method, build_params(report_period), expect=method)
        return decode_gradebook(tokenize(payload))


def build_params(report_period: Optional[int] = None) -> str:
    """Build the ``paramStr`` document for a gradebook request."""
    parms = etree.Element("Parms")
    etree.SubElement(parms, "ChildIntID").text = "0"
    if report_period is not None:
        etree.SubElement(parms, "ReportPeriod").text = str(report_period)
    return etree.tostring(parms, encoding="unicode")


def extract_payload(raw: Union[str, bytes], expect: str) -> str:
    """Pull the inner document out of a SOAP response.

    The portal returns its payload as escaped text inside the envelope. When
    the call fails it sends an ``RT_ERROR`` record there instead.
    """
    payload = None
    for event in tokenize(raw):
        if isinstance(event, Characters):
            payload = event.text
            break
    if payload is None:
        raise ResponseBodyNotFound()

    for event in tokenize(payload):
        if isinstance(event, StartElement):
            if event.name == expect:
                return payload
            if event.name == ERROR_TAG:
                raise decode_remote_error(payload)

    raise ExpectedPayloadNotFound(expect)


def decode_remote_error(payload: str) -> RemoteError:
    """Read the message and stack trace out of an ``RT_ERROR`` record."""
    message = None
    trace = None

    for event in tokenize(payload):
        if isinstance(event, StartElement) and event.name == ERROR_TAG:
            try:
                message = Attributes.from_event(event).required("ERROR_MESSAGE")
            except MissingAttribute as e:
                raise RemoteErrorParsingFailed(payload) from e
        elif isinstance(event, Characters) and message is not None:
            trace = event.text
        elif isinstance(event, EndElement) and event.name == ERROR_TAG:
            break

    if message is None:
        raise RemoteErrorParsingFailed(payload)

    logger.warning("Portal reported an error: %s", message)
    return RemoteError(message, trace)


# Singleton instance
_client: Optional[PortalClient] = None


def get_client() -> PortalClient:
    """Get or create a client using the configured credentials."""
    global _client
    if _client is None:
        _client = PortalClient()
    return _client

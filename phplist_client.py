"""
Client for the phpList REST API plugin.

Every public method sends exactly one command as a form-encoded POST to the
API URL (the command goes in the `cmd` field) and reads the
`{"status": ..., "data": ...}` envelope that comes back.

- Error envelopes and unexpected payload shapes are not exceptions: methods
  return None (or False for login/subscriber_delete).
- Network problems, timeouts and non-2xx HTTP statuses are raised by the
  transport (requests exceptions) and are not caught here.

Example:
    with PhpListRESTApiClient(url, "admin", "secret-password") as phplist:
        if phplist.login():
            subscriber_id = phplist.subscriber_add("someone@example.com")
"""

import logging
from typing import Any, Dict, Iterable, Optional, Union

from api_client import DEFAULT_TIMEOUT, HttpTransport, Transport
from envelope import Envelope, decode_body, is_success
from utils.config import ClientConfig
from utils.log import redact

# handlers are the caller's business; utils.log.get_logger("phplist-client") adds a console one
logger = logging.getLogger("phplist-client")
logger.addHandler(logging.NullHandler())


class PhpListRESTApiClient:
    def __init__(
        self,
        url: str,
        login: str,
        password: str,
        secret: str = "",
        transport: Optional[Transport] = None,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self._url = url
        self._login = login
        self._password = password
        self._secret = secret or ""
        # a transport we build is ours to close; an injected one is shared
        self._owns_transport = transport is None
        self._transport = transport if transport is not None else HttpTransport(timeout=timeout)

    @classmethod
    def from_config(cls, config: ClientConfig, transport: Optional[Transport] = None):
        return cls(
            config.url,
            config.login,
            config.password,
            secret=config.secret,
            transport=transport,
            timeout=config.timeout,
        )

    @classmethod
    def from_env(cls, prefix: str = "PHPLIST_", transport: Optional[Transport] = None):
        config = ClientConfig.from_env(prefix=prefix)
        logger.debug("Loaded phpList config: %s", config.redacted())
        return cls.from_config(config, transport=transport)

    @property
    def url(self):
        return self._url

    def close(self):
        if self._owns_transport:
            self._transport.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    # ---------- dispatch ----------
    def _call_api(self, command: str, params: Dict[str, Any], decode: bool = True):
        """
        POST one command. Returns the decoded JSON body (None if it is not
        valid JSON), or the raw text when decode is False.
        """
        post_params = dict(params)
        post_params["cmd"] = command
        if self._secret:
            post_params["secret"] = self._secret

        logger.debug("POST %s %s", command, redact(post_params))
        body = self._transport.post(self._url, post_params)
        return decode_body(body) if decode else body

    def _check_validity(self, result) -> bool:
        return is_success(result)

    def _envelope(self, command: str, params: Dict[str, Any]) -> Envelope:
        envelope = Envelope.from_result(self._call_api(command, params))
        if not envelope.ok:
            logger.warning("phpList command %s failed (status=%s)", command, envelope.status)
        return envelope

    # ---------- session ----------
    def login(self) -> bool:
        """True if the credentials were accepted."""
        result = self._call_api("login", {"login": self._login, "password": self._password})
        if not self._check_validity(result):
            logger.warning("phpList login refused for %s", self._login)
            return False
        return True

    # ---------- lists ----------
    def lists_get(self):
        """All lists, exactly as the server returns them."""
        return self._envelope("listsGet", {}).payload()

    def list_add(self, name: str, description: str):
        """Create a list; returns the new list id."""
        params = {
            "name": name,
            "description": description,
            "listorder": 0,
            "active": 1,
        }
        return self._envelope("listAdd", params).field("id")

    def list_subscriber_add(self, list_id, subscriber_id):
        """Add a subscriber to a list; returns the lists the subscriber is now on."""
        params = {"list_id": list_id, "subscriber_id": subscriber_id}
        return self._envelope("listSubscriberAdd", params).payload()

    def lists_subscriber(self, subscriber_id):
        """Lists the subscriber is a member of."""
        return self._envelope("listsSubscriber", {"subscriber_id": subscriber_id}).payload()

    def list_subscriber_delete(self, list_id, subscriber_id):
        """Remove a subscriber from a list; returns the lists left."""
        params = {"list_id": list_id, "subscriber_id": subscriber_id}
        return self._envelope("listSubscriberDelete", params).payload()

    # ---------- subscribers ----------
    def subscriber_find_by_email(self, email: str):
        """Subscriber id for an email address."""
        return self._envelope("subscriberGetByEmail", {"email": email}).identifier()

    def subscribe(self, email: str, lists: Union[str, Iterable[Any]]):
        """
        Add an unconfirmed subscriber to `lists` and let phpList send the
        request-for-confirmation email.

        `lists` is a comma-separated string of list ids ("1,2,3"), sent as is.
        Any other iterable of ids is joined with commas first.
        """
        if not isinstance(lists, str):
            lists = ",".join(str(list_id) for list_id in lists)
        params = {
            "email": email,
            "foreignkey": "",
            "htmlemail": 1,
            "subscribepage": 0,
            "lists": lists,
        }
        return self._envelope("subscribe", params).identifier()

    def subscriber_add(self, email: str):
        """Add a confirmed subscriber; returns its id."""
        params = {
            "email": email,
            "foreignkey": "",
            "confirmed": 1,
            "htmlemail": 1,
            "disabled": 0,
        }
        return self._envelope("subscriberAdd", params).identifier()

    def subscriber_update(self, subscriber_id, email: str):
        """Change a subscriber's email address; returns its id."""
        params = {
            "id": subscriber_id,
            "email": email,
            "confirmed": 1,
            "htmlemail": 1,
        }
        return self._envelope("subscriberUpdate", params).identifier()

    def subscriber_delete(self, subscriber_id) -> bool:
        return self._envelope("subscriberDelete", {"id": subscriber_id}).ok

    def subscriber_get(self, subscriber_id):
        """
        Subscriber data, but only if the server answered with the subscriber
        we asked for.
        """
        envelope = self._envelope("subscriberGet", {"id": subscriber_id})
        fetched_id = envelope.identifier()
        if fetched_id is None:
            return None
        if str(fetched_id) != str(subscriber_id):
            logger.warning("subscriberGet asked for id %s but got %s", subscriber_id, fetched_id)
            return None
        return envelope.data

    def subscriber_get_by_foreignkey(self, foreignkey: str):
        """
        Subscriber data for a foreign key. Unlike subscriber_find_by_email
        this returns the whole subscriber, not just the id.
        """
        envelope = self._envelope("subscriberGetByForeignkey", {"foreignkey": foreignkey})
        return envelope.data if envelope.identifier() is not None else None

    def subscriber_count(self):
        """Total number of subscribers on the installation."""
        return self._envelope("subscribersCount", {}).field("total")

"""CloudFormation stack client."""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any, Callable, Mapping, TypeVar, cast

import botocore.exceptions
from botocore.config import Config

from ...core.models import (
    Output,
    Parameter,
    ResourceInstance,
    StackSnapshot,
    TemplateDocument,
)
from ...core.template import parse_template
from ...exceptions import (
    AuthFailure,
    BackendError,
    StackNotFound,
    StackviewError,
    TransientBackend,
)

if TYPE_CHECKING:
    import boto3
    from mypy_boto3_cloudformation.client import CloudFormationClient
    from mypy_boto3_cloudformation.type_defs import StackTypeDef
    from mypy_boto3_iam.client import IAMClient
    from mypy_boto3_sts.client import STSClient

    from ..._logging import StackviewLogger

LOGGER = cast("StackviewLogger", logging.getLogger(__name__))

_T = TypeVar("_T")

# Number of times a call is attempted while the control plane reports itself
# as unavailable. The wait between attempts doubles each time:
#
#   min(BACKOFF_BASE * 2 ^ (attempt - 1), BACKOFF_MAX)
#
# botocore is limited to a single attempt so that this is the only retry
# policy applied to a call.
MAX_ATTEMPTS = 4
BACKOFF_BASE = 0.5
BACKOFF_MAX = 4.0

AUTH_ERROR_CODES = frozenset(
    [
        "AccessDenied",
        "AccessDeniedException",
        "ExpiredToken",
        "ExpiredTokenException",
        "InvalidClientTokenId",
        "SignatureDoesNotMatch",
        "UnrecognizedClientException",
    ]
)
TRANSIENT_ERROR_CODES = frozenset(
    [
        "InternalError",
        "InternalFailure",
        "RequestLimitExceeded",
        "ServiceUnavailable",
        "Throttling",
        "ThrottlingException",
    ]
)
TRANSIENT_CONNECTION_ERRORS = (
    botocore.exceptions.ConnectionClosedError,
    botocore.exceptions.ConnectTimeoutError,
    botocore.exceptions.EndpointConnectionError,
    botocore.exceptions.ReadTimeoutError,
)


def get_client_config() -> Config:
    """botocore config used for every client of the stack client."""
    return Config(retries={"total_max_attempts": 1, "mode": "standard"})


def classify_client_error(
    err: botocore.exceptions.ClientError, *, operation: str, stack_name: str | None = None
) -> StackviewError:
    """Translate a botocore error into the Stackview error it represents.

    Error codes without a more specific equivalent become a
    :class:`~stackview.exceptions.BackendError`.

    """
    error = err.response.get("Error", {})
    code = error.get("Code", "")
    message = error.get("Message", str(err))
    if stack_name and code == "ValidationError" and "does not exist" in message:
        return StackNotFound(stack_name)
    if code in AUTH_ERROR_CODES:
        return AuthFailure(message)
    if code in TRANSIENT_ERROR_CODES:
        return TransientBackend(operation, message)
    return BackendError(operation, f"{code}: {message}" if code else message)


class StackClient:
    """Read the state of a deployed stack from CloudFormation.

    Every operation is read-only. Calls that fail because the control plane
    is temporarily unavailable are retried with exponential backoff.

    """

    cloudformation: CloudFormationClient
    iam: IAMClient
    region: str
    sts: STSClient

    def __init__(self, session: boto3.Session, *, region: str | None = None) -> None:
        """Instantiate class.

        Args:
            session: boto3 session used to create the clients.
            region: Region of the stack. Defaults to the region of the session.

        """
        config = get_client_config()
        self.region = region or session.region_name or ""
        self.cloudformation = session.client(
            "cloudformation", config=config, region_name=region
        )
        self.iam = session.client("iam", config=config, region_name=region)
        self.sts = session.client("sts", config=config, region_name=region)
        self._account_id: str | None = None

    def _call(
        self,
        operation: str,
        func: Callable[..., _T],
        *,
        stack_name: str | None = None,
        **kwargs: Any,
    ) -> _T:
        """Call the API, retrying while the control plane is unavailable.

        Connection failures and timeouts are retried the same way as a control
        plane that reports itself as unavailable.

        Raises:
            AuthFailure: Credentials are missing or were rejected.
            BackendError: The call was rejected or botocore failed.
            StackNotFound: The stack does not exist.
            TransientBackend: Still unavailable after the last attempt.

        """
        sleep_time = BACKOFF_BASE
        attempt = 1
        while True:
            try:
                return func(**kwargs)
            except (
                botocore.exceptions.NoCredentialsError,
                botocore.exceptions.PartialCredentialsError,
            ) as err:
                raise AuthFailure(str(err)) from err
            except botocore.exceptions.ClientError as err:
                error = classify_client_error(
                    err, operation=operation, stack_name=stack_name
                )
                if not isinstance(error, TransientBackend) or attempt >= MAX_ATTEMPTS:
                    raise error from err
            except TRANSIENT_CONNECTION_ERRORS as err:
                error = TransientBackend(operation, str(err))
                if attempt >= MAX_ATTEMPTS:
                    raise error from err
            except botocore.exceptions.BotoCoreError as err:
                raise BackendError(operation, str(err)) from err
            LOGGER.verbose(
                "%s (attempt %s of %s); retrying in %s seconds",
                error.message,
                attempt,
                MAX_ATTEMPTS,
                sleep_time,
            )
            time.sleep(sleep_time)
            sleep_time = min(sleep_time * 2, BACKOFF_MAX)
            attempt += 1

    def get_account(self) -> tuple[str, str]:
        """Get the ID and alias of the account the credentials belong to.

        The alias is empty when the account has none or it can't be listed.

        """
        identity = self._call("GetCallerIdentity", self.sts.get_caller_identity)
        self._account_id = identity.get("Account", "")
        alias = ""
        try:
            aliases = self.iam.list_account_aliases().get("AccountAliases", [])
        except (botocore.exceptions.BotoCoreError, botocore.exceptions.ClientError):
            LOGGER.debug("unable to list account aliases", exc_info=True)
        else:
            alias = aliases[0] if aliases else ""
        return self._account_id, alias

    def get_stack(self, stack_name: str) -> StackSnapshot:
        """Get the descriptor of a stack.

        The returned snapshot contains the parameters, outputs, account and
        region but no template or resources.

        Raises:
            StackNotFound: The stack does not exist.

        """
        stacks = self._call(
            "DescribeStacks",
            self.cloudformation.describe_stacks,
            stack_name=stack_name,
            StackName=stack_name,
        ).get("Stacks", [])
        if not stacks:
            raise StackNotFound(stack_name)
        stack: StackTypeDef = stacks[0]
        account_id, account_alias = self.get_account()
        LOGGER.debug("found stack %s", stack.get("StackId", stack_name))
        return StackSnapshot(
            name=stack.get("StackName", stack_name),
            region=self.region,
            account_id=account_id,
            account_alias=account_alias,
            parameters=tuple(
                Parameter(
                    name=param.get("ParameterKey", ""),
                    actual_value=param.get("ParameterValue", ""),
                    resolved_value=param.get("ResolvedValue"),
                )
                for param in stack.get("Parameters", [])
            ),
            outputs=tuple(
                Output(
                    name=output.get("OutputKey", ""),
                    description=output.get("Description"),
                    value=output.get("OutputValue", ""),
                    export_name=output.get("ExportName"),
                )
                for output in stack.get("Outputs", [])
            ),
        )

    def get_template(
        self, stack_name: str, parameters: Mapping[str, Any] | None = None
    ) -> TemplateDocument:
        """Get the parsed template of a stack.

        Args:
            stack_name: Name of the stack.
            parameters: Parameter name to value, used to resolve conditions.

        Raises:
            StackNotFound: The stack does not exist.
            TemplateParseError: The template could not be parsed.

        """
        response = self._call(
            "GetTemplate",
            self.cloudformation.get_template,
            stack_name=stack_name,
            StackName=stack_name,
        )
        pseudo_parameters = {"AWS::Region": self.region, "AWS::StackName": stack_name}
        if self._account_id:
            pseudo_parameters["AWS::AccountId"] = self._account_id
        return parse_template(
            response.get("TemplateBody", ""),
            parameters,
            pseudo_parameters=pseudo_parameters,
            stack_name=stack_name,
        )

    def get_resources(self, stack_name: str) -> tuple[ResourceInstance, ...]:
        """Get every resource of a stack in the order CloudFormation lists them.

        Raises:
            StackNotFound: The stack does not exist.

        """
        resources: list[ResourceInstance] = []
        kwargs: dict[str, Any] = {"StackName": stack_name}
        while True:
            response = self._call(
                "ListStackResources",
                self.cloudformation.list_stack_resources,
                stack_name=stack_name,
                **kwargs,
            )
            resources.extend(
                ResourceInstance(
                    logical_id=summary["LogicalResourceId"],
                    type=summary["ResourceType"],
                    physical_id=summary.get("PhysicalResourceId"),
                )
                for summary in response.get("StackResourceSummaries", [])
            )
            next_token = response.get("NextToken")
            if not next_token:
                break
            kwargs["NextToken"] = next_token
        LOGGER.debug("stack %s has %s resource(s)", stack_name, len(resources))
        return tuple(resources)

    def snapshot(self, stack_name: str) -> StackSnapshot:
        """Gather everything known about a stack.

        The template is parsed using the current parameter values of the stack.

        """
        stack = self.get_stack(stack_name)
        template = self.get_template(stack_name, stack.parameter_overrides())
        resources = self.get_resources(stack_name)
        return stack.model_copy(update={"template": template, "resources": resources})

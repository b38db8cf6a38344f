"""
Base Gateway Operation for FlowForge AI suggestions.

Every operation is a typed request/response call: the request is validated,
interpolated into a LangChain prompt, sent to the chat model, and the JSON
answer is parsed and validated against the response schema. Empty answers
are replaced by the operation's fallback when it has one.
"""

import logging
from abc import ABC
from typing import Any, ClassVar, Dict, Generic, Optional, Type, TypeVar, Union

import openai
from langchain_core.exceptions import OutputParserException
from langchain_core.messages import BaseMessage
from langchain_core.output_parsers import JsonOutputParser
from langchain_core.prompts import ChatPromptTemplate
from langchain_core.runnables import Runnable
from pydantic import ValidationError

from .errors import EmptyResponseError, GatewayProviderError, GatewayValidationError
from .fallbacks import FALLBACK_OUTPUTS
from .schemas import GatewayRequest, GatewayResponse

# Set up module logger
logger = logging.getLogger(__name__)

# Generic type for request models
TRequest = TypeVar('TRequest', bound=GatewayRequest)
# Generic type for result models
TResult = TypeVar('TResult', bound=GatewayResponse)


class GatewayOperation(ABC, Generic[TRequest, TResult]):
    """
    Abstract base class for all FlowForge AI gateway operations.
    
    Subclasses declare:
    - name: key used for logging and the fallback table
    - request_model / response_model: pydantic schemas
    - system_prompt / template: prompt text; the template is formatted with
      the request fields (snake_case) plus ``format_instructions``
    """
    
    name: ClassVar[str]
    request_model: ClassVar[Type[GatewayRequest]]
    response_model: ClassVar[Type[GatewayResponse]]
    system_prompt: ClassVar[str]
    template: ClassVar[str]
    
    def __init__(self, chat_model: Runnable) -> None:
        """
        Initialize the operation with a chat model.
        
        Args:
            chat_model: Any LangChain chat model (or runnable returning a message)
        """
        self.chat_model = chat_model
        self.logger = logging.getLogger(self.__class__.__name__)
        
        # Set up output parser for structured responses
        self.output_parser = JsonOutputParser(pydantic_object=self.response_model)
        
        self.prompt = ChatPromptTemplate.from_messages([
            ("system", self.system_prompt),
            ("human", self.template + "\n\n{format_instructions}"),
        ])
        self.chain = self.prompt | self.chat_model
    
    @property
    def fallback(self) -> Optional[TResult]:
        """The deterministic fallback output, or None if the operation has none."""
        data = FALLBACK_OUTPUTS.get(self.name)
        if data is None:
            return None
        return self.response_model.model_validate(data, context={"fallback": True})
    
    def __call__(self, request: Union[TRequest, Dict[str, Any]]) -> TResult:
        return self.run(request)
    
    def run(self, request: Union[TRequest, Dict[str, Any]]) -> TResult:
        """
        Execute the operation.
        
        Args:
            request: Request model instance or dict of its fields
            
        Returns:
            Validated response model
            
        Raises:
            GatewayValidationError: Invalid request, or malformed response
            GatewayProviderError: The provider call failed
            EmptyResponseError: No output and no fallback
        """
        validated = self.validate_request(request)
        
        canned = self.short_circuit(validated)
        if canned is not None:
            self.logger.info(f"{self.name} answered without calling the provider")
            return canned
        
        variables = self.prompt_variables(validated)
        variables["format_instructions"] = self.output_parser.get_format_instructions()
        
        self.logger.info(f"{self.name} started")
        try:
            message = self.chain.invoke(variables)
        except openai.OpenAIError as e:
            self.logger.error(f"{self.name} provider call failed: {e}", exc_info=True)
            raise GatewayProviderError(self.name, str(e)) from e
        
        content = _message_text(message)
        self.logger.debug(f"{self.name} raw response: {content[:200]}...")
        data = self._parse_content(content)
        
        if data is None:
            fallback = self.fallback
            if fallback is None:
                self.logger.warning(f"{self.name} returned no output and has no fallback")
                raise EmptyResponseError(self.name, "The AI returned no output.")
            self.logger.warning(f"{self.name} returned no output, using fallback")
            return fallback
        
        try:
            result = self.response_model.model_validate(data)
        except ValidationError as e:
            self.logger.error(f"{self.name} response validation failed: {e}")
            raise GatewayValidationError(self.name, f"Malformed response: {e}") from e
        
        self.logger.info(f"{self.name} succeeded")
        return self.postprocess(result)
    
    def validate_request(self, request: Union[TRequest, Dict[str, Any]]) -> TRequest:
        """Validate a request before anything is sent."""
        if isinstance(request, self.request_model):
            return request
        if isinstance(request, GatewayRequest):
            request = request.model_dump()
        try:
            return self.request_model.model_validate(request)
        except ValidationError as e:
            raise GatewayValidationError(self.name, f"Invalid request: {e}") from e
    
    def prompt_variables(self, request: TRequest) -> Dict[str, Any]:
        """
        Values interpolated into the template.
        
        Optional fields left empty are shown as "Not specified".
        """
        return {
            key: "Not specified" if value is None else value
            for key, value in request.model_dump().items()
        }
    
    def short_circuit(self, request: TRequest) -> Optional[TResult]:
        """Return a response without calling the provider, or None to proceed."""
        return None
    
    def postprocess(self, result: TResult) -> TResult:
        """Adjust a validated response before returning it."""
        return result
    
    def _parse_content(self, content: str) -> Optional[Any]:
        """
        Parse the model text as JSON.
        
        Returns:
            Parsed data, or None when the model produced no output
            
        Raises:
            GatewayValidationError: If the text is not valid JSON
        """
        if not content.strip():
            return None
        try:
            data = self.output_parser.parse(content)
        except OutputParserException as e:
            self.logger.error(f"{self.name} returned invalid JSON: {e}")
            raise GatewayValidationError(self.name, "Response was not valid JSON") from e
        if data is None:
            return None
        return data


def _message_text(message: Any) -> str:
    """Extract plain text from a chat model result."""
    if isinstance(message, BaseMessage):
        content = message.content
    else:
        content = message
    if isinstance(content, list):
        parts = []
        for part in content:
            if isinstance(part, str):
                parts.append(part)
            elif isinstance(part, dict) and part.get("type") == "text":
                parts.append(part.get("text", ""))
        return "".join(parts)
    return content if isinstance(content, str) else ""

"""Use cases do dispatcher de templates."""

from app.use_cases.dispatch.dispatch_template import DispatchTemplateUseCase, parse_template_request

__all__ = ["DispatchTemplateUseCase", "parse_template_request"]

# Copyright (c) 2025 Shiladitya Mallick
# This file is part of the Storytime - Memory Journal project.
# Licensed under the MIT License - see the LICENSE file for details.


from .user import User
from .story import Story, StoryDomain
from .metric_bucket import MetricBucket, MetricPeriod
from .prompt import Prompt
from .tenant import Tenant

#!/usr/bin/env python3
import os
import aws_cdk as cdk
from stacks.claims_api_stack import ClaimsApiStack

app = cdk.App()

ClaimsApiStack(app, "ClaimsApiStack",
    bedrock_model_id=app.node.try_get_context("bedrock_model_id") or "amazon.nova-micro-v1:0",
    env=cdk.Environment(account=os.getenv('CDK_DEFAULT_ACCOUNT'), region=os.getenv('CDK_DEFAULT_REGION')),
)

app.synth()

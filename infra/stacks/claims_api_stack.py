from aws_cdk import (
    Stack,
    RemovalPolicy,
    aws_apigateway as apigw,
    aws_dynamodb as dynamodb,
    aws_iam as iam,
    aws_lambda as lambda_,
    aws_logs as logs,
    aws_s3 as s3,
)
import aws_cdk as cdk
from constructs import Construct

POWERTOOLS_LAYER_ACCOUNT = "017000801446"
POWERTOOLS_LAYER_NAME = "AWSLambdaPowertoolsPythonV3-python313-x86_64"
POWERTOOLS_LAYER_VERSION = 7


class ClaimsApiStack(Stack):
    """
    Claims API Stack

    - DynamoDB table of claims (partition key: id)
    - S3 bucket of claim notes (<claim_id>.json)
    - Lambda running claims_api.api.handlers.lambda_handler
    - REST API:
        GET  /claims/health
        GET  /claims/{id}
        POST /claims
        POST /claims/{id}/summarize
    """

    def __init__(
        self,
        scope: Construct,
        construct_id: str,
        bedrock_model_id: str = "amazon.nova-micro-v1:0",
        **kwargs
    ) -> None:
        super().__init__(scope, construct_id, **kwargs)

        # ==============================================================================
        # Storage
        # ==============================================================================

        self.claims_table = dynamodb.Table(self, "ClaimsTable",
            partition_key=dynamodb.Attribute(name="id", type=dynamodb.AttributeType.STRING),
            billing_mode=dynamodb.BillingMode.PAY_PER_REQUEST,
            removal_policy=RemovalPolicy.DESTROY,
            point_in_time_recovery=True
        )

        self.notes_bucket = s3.Bucket(self, "NotesBucket",
            removal_policy=RemovalPolicy.DESTROY,
            auto_delete_objects=True,
            encryption=s3.BucketEncryption.S3_MANAGED,
            enforce_ssl=True,
            versioned=True,
            block_public_access=s3.BlockPublicAccess.BLOCK_ALL
        )

        # ==============================================================================
        # API Lambda
        # ==============================================================================

        powertools_layer = lambda_.LayerVersion.from_layer_version_arn(
            self, "PowertoolsLayer",
            layer_version_arn=(
                f"arn:aws:lambda:{self.region}:{POWERTOOLS_LAYER_ACCOUNT}:layer:"
                f"{POWERTOOLS_LAYER_NAME}:{POWERTOOLS_LAYER_VERSION}"
            )
        )

        self.api_lambda = lambda_.Function(
            self, "ClaimsApiLambda",
            runtime=lambda_.Runtime.PYTHON_3_13,
            handler="claims_api.api.handlers.lambda_handler",
            code=lambda_.Code.from_asset("../src"),
            timeout=cdk.Duration.seconds(30),
            memory_size=256,
            environment={
                "POWERTOOLS_SERVICE_NAME": "claims-api",
                "POWERTOOLS_METRICS_NAMESPACE": "ClaimsApi",
                "CLAIMS_TABLE_NAME": self.claims_table.table_name,
                "NOTES_BUCKET": self.notes_bucket.bucket_name,
                "BEDROCK_MODEL_ID": bedrock_model_id,
                "USE_MOCKS": "false",
            },
            tracing=lambda_.Tracing.ACTIVE,
            layers=[powertools_layer]
        )

        self.claims_table.grant_read_write_data(self.api_lambda)
        self.notes_bucket.grant_read_write(self.api_lambda)

        self.api_lambda.add_to_role_policy(iam.PolicyStatement(
            actions=["bedrock:InvokeModel"],
            resources=[f"arn:aws:bedrock:*::foundation-model/{bedrock_model_id}"]
        ))

        # ==============================================================================
        # API Gateway REST API
        # ==============================================================================

        api_log_group = logs.LogGroup(
            self, "ApiGatewayLogs",
            retention=logs.RetentionDays.ONE_WEEK,
            removal_policy=cdk.RemovalPolicy.DESTROY
        )

        self.api = apigw.RestApi(
            self, "ClaimsApi",
            rest_api_name="Claims API",
            description="Claim lookup, creation and AI summaries",
            deploy_options=apigw.StageOptions(
                stage_name="prod",
                logging_level=apigw.MethodLoggingLevel.INFO,
                access_log_destination=apigw.LogGroupLogDestination(api_log_group),
                access_log_format=apigw.AccessLogFormat.json_with_standard_fields(
                    caller=True,
                    http_method=True,
                    ip=True,
                    protocol=True,
                    request_time=True,
                    resource_path=True,
                    response_length=True,
                    status=True,
                    user=True,
                )
            ),
            default_cors_preflight_options=apigw.CorsOptions(
                allow_origins=apigw.Cors.ALL_ORIGINS,
                allow_methods=apigw.Cors.ALL_METHODS,
                allow_headers=["Content-Type", "Authorization"],
            )
        )

        integration = apigw.LambdaIntegration(self.api_lambda, proxy=True)

        claims_resource = self.api.root.add_resource("claims")
        claims_resource.add_method("POST", integration)

        claims_resource.add_resource("health").add_method("GET", integration)

        claim_resource = claims_resource.add_resource("{id}")
        claim_resource.add_method("GET", integration)
        claim_resource.add_resource("summarize").add_method("POST", integration)

        # ==============================================================================
        # Outputs
        # ==============================================================================

        cdk.CfnOutput(
            self, "ApiEndpoint",
            value=self.api.url,
            description="Claims API Endpoint"
        )

        cdk.CfnOutput(
            self, "ClaimsTableName",
            value=self.claims_table.table_name
        )

        cdk.CfnOutput(
            self, "NotesBucketName",
            value=self.notes_bucket.bucket_name
        )

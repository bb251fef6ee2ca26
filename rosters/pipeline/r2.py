import boto3
from botocore.exceptions import BotoCoreError, ClientError


def get_r2_client(settings):
    return boto3.client(
        "s3",
        endpoint_url=f"https://{settings.r2_account_id}.r2.cloudflarestorage.com",
        aws_access_key_id=settings.r2_access_key_id,
        aws_secret_access_key=settings.r2_secret_access_key,
    )


def download_from_r2(settings, key, local_path):
    """
    Download an object from R2 if it exists.
    Returns True if downloaded, False if R2 is not configured or the object is missing.
    """
    if not settings.r2_configured:
        return False

    try:
        response = get_r2_client(settings).get_object(Bucket=settings.r2_bucket_name, Key=key)
        body = response["Body"].read()
    except (BotoCoreError, ClientError):
        return False

    local_path.parent.mkdir(parents=True, exist_ok=True)
    with open(local_path, "wb") as f:
        f.write(body)
    return True


def upload_to_r2(settings, key, body, content_type="application/json"):
    """
    Overwrite an R2 object with body. Errors propagate to the caller.
    Returns False without uploading when R2 is not configured.
    """
    if not settings.r2_configured:
        return False

    get_r2_client(settings).put_object(
        Bucket=settings.r2_bucket_name,
        Key=key,
        Body=body,
        ContentType=content_type,
    )
    return True
